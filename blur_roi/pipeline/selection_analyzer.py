# pipeline/selection_analyzer.py
import logging
from typing import Optional

from ..exceptions import SelectionOutOfBoundsError
from ..models.analysis_result import AnalysisResult
from ..models.geometry import DisplayLayout, Point, Rectangle
from ..models.image import Image
from ..services.classification_service import ClassificationService
from ..services.contrast_service import ContrastService
from ..services.geometry_service import GeometryService
from ..services.image_service import ImageService
from ..services.sharpness_service import SharpnessService

logger = logging.getLogger(__name__)


def analyze_selection(
    layout: DisplayLayout,
    image: Image,
    p1: Point,
    p2: Point,
    *,
    displayed_region: Optional[Rectangle] = None,
    geometry_service: GeometryService = GeometryService(),
    image_service: ImageService = ImageService(),
    contrast_service: ContrastService = ContrastService(),
    sharpness_service: SharpnessService = SharpnessService(),
    classification_service: ClassificationService = ClassificationService(),
) -> Optional[AnalysisResult]:
    """
    Score the focus of the rectangle dragged from *p1* to *p2* on the canvas:
        • drop zero-width/zero-height drags (returns None, not an error)
        • reject drags leaving layout.bounds
        • map both corners to source pixels and extract the ROI
        • equalize contrast, measure the Laplacian variance, classify

    *layout* describes how the displayed image sits on the canvas. When only a
    part of *image* is on display (a previous ROI), pass that part as
    *displayed_region* so the selection is offset back into *image* coordinates.

    Raises:
        SelectionOutOfBoundsError: a corner lies outside the rendered image.
    """
    if geometry_service.normalize_rectangle(p1, p2).is_empty:
        logger.debug(f"Ignoring empty selection {p1} → {p2}")
        return None

    if not geometry_service.validate_in_bounds(p1, p2, layout.bounds):
        logger.warning(f"Selection {p1} → {p2} outside {layout.bounds}")
        raise SelectionOutOfBoundsError()

    # 1. Canvas → source pixels
    x1, y1 = geometry_service.canvas_to_source(layout, p1)
    x2, y2 = geometry_service.canvas_to_source(layout, p2)
    if displayed_region is not None:
        x1, x2 = x1 + displayed_region.x, x2 + displayed_region.x
        y1, y2 = y1 + displayed_region.y, y2 + displayed_region.y
    region = geometry_service.normalize_rectangle(Point(x1, y1), Point(x2, y2))
    if region.is_empty:
        # A drag narrower than one source pixel
        logger.debug(f"Selection collapsed to {region} in source pixels")
        return None

    # 2. Region of interest, as a standalone copy
    roi = image_service.extract_region(image, region)

    # 3. Contrast normalization
    equalized = contrast_service.equalize_histogram(roi)

    # 4. Focus measure
    measurement = sharpness_service.measure(equalized)

    # 5. Verdict
    verdict = classification_service.classify(measurement.score)

    result = AnalysisResult(
        verdict=verdict,
        score=int(measurement.score),
        raw_score=measurement.score,
        region=region,
        roi=roi,
        edge_visualization=sharpness_service.edge_visualization(measurement.edge_response),
    )
    logger.info(f"Region {region.width}x{region.height}@({region.x},{region.y}): "
                f"{verdict.label} (score {result.score})")
    return result
