# pipeline/focus_session.py
"""
Controller for one interactive blur-check session.

The GUI forwards its events here (file chosen, canvas resized, mouse press /
move / release, button clicks) and renders whatever `displayed_image`,
`verdict_text` and `score_text` hold afterwards. Everything runs synchronously
on the caller's thread; each event completes before the next is handled.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..exceptions import SelectionOutOfBoundsError
from ..models.analysis_result import AnalysisResult
from ..models.geometry import Canvas, DisplayBounds, DisplayLayout, Point, Rectangle
from ..models.image import Image
from ..services.geometry_service import GeometryService
from ..services.image_service import ImageService
from .selection_analyzer import analyze_selection

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Please make selection"


class FocusSession:
    """Manages state for a single user's blur-check session."""

    def __init__(self,
                 canvas: Canvas,
                 image_service: ImageService = None,
                 geometry_service: GeometryService = None):
        self.image_service = image_service or ImageService()
        self.geometry_service = geometry_service or GeometryService()
        self.canvas = canvas

        self.image: Optional[Image] = None
        self.displayed_image: Optional[Image] = None
        self.displayed_region: Optional[Rectangle] = None  # source pixels on display
        self.layout: Optional[DisplayLayout] = None
        self.last_result: Optional[AnalysisResult] = None

        self.verdict_text = PLACEHOLDER_TEXT
        self.score_text = PLACEHOLDER_TEXT
        self.status_message: Optional[str] = None

        self._start: Optional[Point] = None
        self._end: Optional[Point] = None
        self._drawing = False

    # ─── Loading and layout ────────────────────────────────────────
    @property
    def display_bounds(self) -> Optional[DisplayBounds]:
        return self.layout.bounds if self.layout else None

    def load_image(self, path: Union[str, Path]) -> Image:
        """
        Replace the session image. On UnreadableImageError or
        InvalidDimensionError the previous state is kept untouched.
        """
        image = self.image_service.load(path)
        full = Rectangle(0, 0, image.width, image.height)
        layout = self._layout_for(self.canvas, image)

        self.image = image
        self.last_result = None
        self._drawing = False
        self._commit(image, full, layout)
        self._clear_texts()
        return image

    def set_canvas(self, width: int, height: int, left: float = 0.0, top: float = 0.0) -> None:
        canvas = Canvas(width=width, height=height, left=left, top=top)
        if self.displayed_image is not None:
            self.layout = self._layout_for(canvas, self.displayed_image)
        self.canvas = canvas

    def _layout_for(self, canvas: Canvas, image: Image) -> DisplayLayout:
        return self.geometry_service.compute_layout(canvas, image.width, image.height)

    def _show(self, image: Image, region: Rectangle) -> None:
        self._commit(image, region, self._layout_for(self.canvas, image))

    def _commit(self, image: Image, region: Rectangle, layout: DisplayLayout) -> None:
        self.displayed_image = image
        self.displayed_region = region
        self.layout = layout

    def _clear_texts(self) -> None:
        self.verdict_text = PLACEHOLDER_TEXT
        self.score_text = PLACEHOLDER_TEXT
        self.status_message = None

    # ─── Drag gesture ──────────────────────────────────────────────
    def press(self, point: Point) -> None:
        if self.image is None:
            return
        self._start = self._end = point
        self._drawing = True

    def move(self, point: Point) -> None:
        if self.image is None:
            return
        self._end = point

    def selection_preview(self) -> Optional[Rectangle]:
        """
        Rectangle being dragged, in canvas coordinates, for the GUI to outline.
        Carries floats when the event points do.
        """
        if not self._drawing:
            return None
        return self.geometry_service.normalize_rectangle(self._start, self._end)

    def release(self, point: Point) -> Optional[AnalysisResult]:
        if self.image is None or not self._drawing:
            return None
        self._end = point
        self._drawing = False
        return self.analyze(self._start, self._end)

    # ─── Analysis ──────────────────────────────────────────────────
    def analyze(self, p1: Point, p2: Point) -> Optional[AnalysisResult]:
        """
        Run the full pipeline on the canvas rectangle p1/p2.

        Returns None for an empty drag. On SelectionOutOfBoundsError the
        status message is set and the error re-raised; nothing else changes.
        """
        if self.image is None:
            return None
        try:
            result = analyze_selection(
                self.layout, self.image, p1, p2,
                displayed_region=self.displayed_region,
                geometry_service=self.geometry_service,
                image_service=self.image_service,
            )
        except SelectionOutOfBoundsError as err:
            self.status_message = str(err)
            raise

        if result is None:
            return None

        layout = self._layout_for(self.canvas, result.roi)
        self.last_result = result
        self.status_message = None
        self.verdict_text = result.verdict.label
        self.score_text = f"{result.score}"
        self._commit(result.roi, result.region, layout)
        return result

    # ─── Buttons ───────────────────────────────────────────────────
    def show_color(self) -> Optional[Image]:
        """Display the last analysed region in color."""
        if self.last_result is None:
            return None
        self._show(self.last_result.roi, self.last_result.region)
        return self.displayed_image

    def show_edges(self) -> Optional[Image]:
        """Display |Laplacian| of the last analysed region."""
        if self.last_result is None:
            return None
        self._show(self.last_result.edge_visualization, self.last_result.region)
        return self.displayed_image

    def reset(self) -> Optional[Image]:
        """Back to the full image, results cleared from the status texts."""
        if self.image is None:
            return None
        self._show(self.image, Rectangle(0, 0, self.image.width, self.image.height))
        self._clear_texts()
        return self.displayed_image
