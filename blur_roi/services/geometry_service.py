from __future__ import annotations

import logging
import math
import os
from typing import Tuple

from dotenv import load_dotenv

from ..exceptions import InvalidDimensionError
from ..models.geometry import (
    Canvas,
    DisplayBounds,
    DisplayLayout,
    FitMode,
    Point,
    Rectangle,
)

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

TRUNCATE = "truncate"
NEAREST = "nearest"


def _round_half_away_from_zero(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class GeometryService:
    """
    Maps between a fixed-size display canvas and source image pixels, for an
    image scaled to fit the canvas with its aspect ratio preserved and centered
    (pillarboxed or letterboxed).

    The fit mode is decided once, in compute_layout, and every conversion reads
    it from the resulting DisplayLayout.
    """

    def __init__(self, rounding: str = None):
        """
        Args:
            rounding: "truncate" (default) or "nearest" (round half away from zero),
                used when converting canvas points to integer source pixels.
        """
        self.rounding = (rounding or os.getenv("COORD_ROUNDING", TRUNCATE)).strip().lower()
        if self.rounding not in (TRUNCATE, NEAREST):
            raise ValueError(f"Unknown COORD_ROUNDING {self.rounding!r}, "
                             f"expected {TRUNCATE!r} or {NEAREST!r}")

    # ─── Layout ────────────────────────────────────────────────────
    @staticmethod
    def fit_mode(box_w: float, box_h: float, img_w: float, img_h: float) -> FitMode:
        for name, value in (("canvas width", box_w), ("canvas height", box_h),
                            ("image width", img_w), ("image height", img_h)):
            if value <= 0:
                raise InvalidDimensionError(f"{name} must be positive, got {value}")

        box_ratio = box_w / box_h
        img_ratio = img_w / img_h
        # Equal ratios give identical bounds in both branches
        return FitMode.FIT_HEIGHT if box_ratio > img_ratio else FitMode.FIT_WIDTH

    def compute_layout(self, canvas: Canvas, img_w: int, img_h: int) -> DisplayLayout:
        mode = self.fit_mode(canvas.width, canvas.height, img_w, img_h)

        if mode is FitMode.FIT_HEIGHT:
            # Canvas is wider than the image: full height, side padding
            scale = canvas.height / img_h
            padding = (canvas.width - img_w * scale) / 2
            bounds = DisplayBounds(
                top=canvas.top,
                right=canvas.left + canvas.width - padding,
                bottom=canvas.top + canvas.height,
                left=canvas.left + padding,
            )
        else:
            # Canvas is taller than the image: full width, top/bottom padding
            scale = canvas.width / img_w
            padding = (canvas.height - img_h * scale) / 2
            bounds = DisplayBounds(
                top=canvas.top + padding,
                right=canvas.left + canvas.width,
                bottom=canvas.top + canvas.height - padding,
                left=canvas.left,
            )

        logger.debug(f"Layout {img_w}x{img_h} in {canvas.width}x{canvas.height}: "
                     f"{mode.value}, scale={scale:.4f}, bounds={bounds}")
        return DisplayLayout(canvas=canvas, image_width=img_w, image_height=img_h,
                             fit_mode=mode, scale=scale, bounds=bounds)

    def compute_display_bounds(self, canvas: Canvas, img_w: int, img_h: int) -> DisplayBounds:
        return self.compute_layout(canvas, img_w, img_h).bounds

    # ─── Conversions ───────────────────────────────────────────────
    def canvas_to_source(self, layout: DisplayLayout, point: Point) -> Tuple[int, int]:
        """
        Canvas point → integer source pixel, limited to [0, W] x [0, H].
        The point is expected to be inside layout.bounds; callers validate first.
        """
        bounds = layout.bounds
        x = (point.x - bounds.left) / layout.scale
        y = (point.y - bounds.top) / layout.scale

        to_int = int if self.rounding == TRUNCATE else _round_half_away_from_zero
        # The far edge can land a hair beyond W/H through float error
        sx = min(max(to_int(x), 0), layout.image_width)
        sy = min(max(to_int(y), 0), layout.image_height)
        return sx, sy

    @staticmethod
    def source_to_canvas(layout: DisplayLayout, x: float, y: float) -> Point:
        bounds = layout.bounds
        return Point(bounds.left + x * layout.scale, bounds.top + y * layout.scale)

    # ─── Selections ────────────────────────────────────────────────
    @staticmethod
    def normalize_rectangle(p1: Point, p2: Point) -> Rectangle:
        return Rectangle(
            x=min(p1.x, p2.x),
            y=min(p1.y, p2.y),
            width=abs(p1.x - p2.x),
            height=abs(p1.y - p2.y),
        )

    @staticmethod
    def validate_in_bounds(p1: Point, p2: Point, bounds: DisplayBounds) -> bool:
        return bounds.contains(p1) and bounds.contains(p2)
