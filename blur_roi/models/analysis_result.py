from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import numpy as np
from .image import Image
from .geometry import Rectangle


class Verdict(Enum):
    BLURRY = "Blurry"
    NOT_BLURRY = "Not blurry"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class SharpnessMeasurement:
    score: float               # variance of the Laplacian response, >= 0
    edge_response: np.ndarray  # Shape (H, W), dtype float64, signed


@dataclass(frozen=True)
class AnalysisResult:
    """
    Data object holding the outcome of one completed selection.
    Replaced, never updated, on the next selection.
    """
    verdict: Verdict
    score: int                 # integer-truncated variance, what the user sees
    raw_score: float
    region: Rectangle          # analysed rectangle, source pixel coordinates
    roi: Image
    edge_visualization: Image
