from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass(frozen=True)
class Image:
    """
    Simple data object: BGR pixels (+ optional source path for bookkeeping).
    No OpenCV logic outside the repository/services layers.
    """
    pixels: np.ndarray # Shape (H, W, 3), dtype uint8, BGR order.
    path: Path | None = None # Source of the image.

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height), the order the geometry layer works in."""
        return self.width, self.height
