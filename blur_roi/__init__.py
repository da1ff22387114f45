"""
Focus check for a user-selected region of a photograph.

The GUI collaborator loads an image, asks where it is rendered on its canvas,
and hands over the dragged rectangle; see pipeline.focus_session.FocusSession
for the stateful, event-driven version of the same calls.
"""
import logging
from pathlib import Path
from typing import Union

from .exceptions import (
    BlurDetectionError,
    InvalidDimensionError,
    SelectionOutOfBoundsError,
    UnreadableImageError,
)
from .models.analysis_result import AnalysisResult, Verdict
from .models.geometry import Canvas, DisplayBounds, DisplayLayout, FitMode, Point, Rectangle
from .models.image import Image
from .pipeline.focus_session import FocusSession
from .pipeline.selection_analyzer import analyze_selection
from .services.geometry_service import GeometryService
from .services.image_service import ImageService

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'


def configure_logging(level: int = logging.INFO) -> None:
    """Centralized logging setup for host applications; the library never calls it."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt='%H:%M:%S')


def load_image(path: Union[str, Path]) -> Image:
    return ImageService().load(path)


def compute_layout(canvas: Canvas, image: Image) -> DisplayLayout:
    return GeometryService().compute_layout(canvas, image.width, image.height)


def compute_display_bounds(canvas: Canvas, image: Image) -> DisplayBounds:
    return compute_layout(canvas, image).bounds


__all__ = [
    "AnalysisResult",
    "BlurDetectionError",
    "Canvas",
    "DisplayBounds",
    "DisplayLayout",
    "FitMode",
    "FocusSession",
    "Image",
    "InvalidDimensionError",
    "Point",
    "Rectangle",
    "SelectionOutOfBoundsError",
    "UnreadableImageError",
    "Verdict",
    "analyze_selection",
    "compute_display_bounds",
    "compute_layout",
    "configure_logging",
    "load_image",
]
