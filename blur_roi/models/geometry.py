from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle; (x, y) is the top-left corner.
    Ints in source pixels. Canvas-space rectangles (drag previews) keep the
    float coordinates of the event points.
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class Canvas:
    """Fixed-size display surface. (left, top) is its origin in event coordinates."""
    width: int
    height: int
    left: float = 0.0
    top: float = 0.0


@dataclass(frozen=True)
class DisplayBounds:
    top: float
    right: float
    bottom: float
    left: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom


class FitMode(Enum):
    FIT_HEIGHT = "fit_height"  # canvas relatively wider than the image, pillarboxed
    FIT_WIDTH = "fit_width"    # canvas relatively taller than the image, letterboxed


@dataclass(frozen=True)
class DisplayLayout:
    """
    Everything needed to go back and forth between canvas and source pixels.
    Computed once per canvas/image pair; replace it when either changes.
    """
    canvas: Canvas
    image_width: int
    image_height: int
    fit_mode: FitMode
    scale: float            # canvas pixels per source pixel
    bounds: DisplayBounds
