from __future__ import annotations

import math

import pytest

from blur_roi.exceptions import InvalidDimensionError
from blur_roi.models.geometry import Canvas, FitMode, Point, Rectangle
from blur_roi.services.geometry_service import GeometryService


@pytest.fixture
def geometry():
    return GeometryService(rounding="truncate")


def test_wide_image_in_landscape_canvas_is_letterboxed(geometry) -> None:
    layout = geometry.compute_layout(Canvas(400, 300), 800, 200)
    assert layout.fit_mode is FitMode.FIT_WIDTH
    assert layout.scale == 0.5
    b = layout.bounds
    assert (b.left, b.top, b.right, b.bottom) == (0, 100.0, 400, 200.0)
    assert geometry.canvas_to_source(layout, Point(200, 150)) == (400, 100)


def test_tall_image_is_pillarboxed(geometry) -> None:
    layout = geometry.compute_layout(Canvas(400, 300), 300, 600)
    assert layout.fit_mode is FitMode.FIT_HEIGHT
    assert layout.scale == 0.5
    b = layout.bounds
    assert (b.left, b.top, b.right, b.bottom) == (125.0, 0, 275.0, 300)
    assert geometry.canvas_to_source(layout, Point(125, 0)) == (0, 0)
    assert geometry.canvas_to_source(layout, Point(275, 300)) == (300, 600)


def test_canvas_origin_offsets_bounds_and_conversion(geometry) -> None:
    layout = geometry.compute_layout(Canvas(400, 300, left=10, top=20), 800, 200)
    b = layout.bounds
    assert (b.left, b.top, b.right, b.bottom) == (10, 120.0, 410, 220.0)
    assert geometry.canvas_to_source(layout, Point(210, 170)) == (400, 100)


def test_canvas_origin_offsets_pillarboxed_layout(geometry) -> None:
    layout = geometry.compute_layout(Canvas(400, 300, left=10, top=20), 300, 600)
    assert layout.fit_mode is FitMode.FIT_HEIGHT
    b = layout.bounds
    assert (b.left, b.top, b.right, b.bottom) == (135.0, 20, 285.0, 320)
    assert geometry.canvas_to_source(layout, Point(135, 20)) == (0, 0)
    assert geometry.canvas_to_source(layout, Point(210, 170)) == (150, 300)
    assert geometry.canvas_to_source(layout, Point(285, 320)) == (300, 600)


def test_equal_aspect_ratio_fills_canvas(geometry) -> None:
    b = geometry.compute_display_bounds(Canvas(400, 300), 800, 600)
    assert (b.left, b.top, b.right, b.bottom) == (0, 0, 400, 300)


@pytest.mark.parametrize(
    "box_w, box_h, img_w, img_h",
    [(400, 300, 800, 200), (640, 480, 1024, 768), (300, 600, 4000, 3000), (512, 512, 37, 913)],
)
def test_bounds_keep_image_aspect_ratio(geometry, box_w, box_h, img_w, img_h) -> None:
    b = geometry.compute_display_bounds(Canvas(box_w, box_h), img_w, img_h)
    assert b.width > 0 and b.height > 0
    assert math.isclose(b.width / b.height, img_w / img_h, rel_tol=1e-9)


@pytest.mark.parametrize("dims", [(0, 300, 800, 200), (400, 0, 800, 200),
                                  (400, 300, 0, 200), (400, 300, 800, 0)])
def test_zero_dimension_rejected(geometry, dims) -> None:
    box_w, box_h, img_w, img_h = dims
    with pytest.raises(InvalidDimensionError):
        geometry.compute_layout(Canvas(box_w, box_h), img_w, img_h)


def test_canvas_to_source_inverts_within_a_pixel(geometry) -> None:
    layout = geometry.compute_layout(Canvas(640, 480), 1000, 333)
    for point in (Point(0, 161), Point(320.4, 240.7), Point(639, 300.2)):
        sx, sy = geometry.canvas_to_source(layout, point)
        back = geometry.source_to_canvas(layout, sx, sy)
        assert abs(back.x - point.x) <= layout.scale
        assert abs(back.y - point.y) <= layout.scale


def test_truncate_and_nearest_differ_on_fractional_pixels() -> None:
    canvas = Canvas(400, 300)
    point = Point(200.8, 150.8)  # source (401.6, 101.6)
    truncate = GeometryService(rounding="truncate")
    nearest = GeometryService(rounding="nearest")
    assert truncate.canvas_to_source(truncate.compute_layout(canvas, 800, 200), point) == (401, 101)
    assert nearest.canvas_to_source(nearest.compute_layout(canvas, 800, 200), point) == (402, 102)


def test_unknown_rounding_mode_rejected() -> None:
    with pytest.raises(ValueError):
        GeometryService(rounding="ceil")


def test_normalize_rectangle_is_order_independent(geometry) -> None:
    p1, p2 = Point(30, 5), Point(10, 25)
    assert geometry.normalize_rectangle(p1, p2) == Rectangle(10, 5, 20, 20)
    assert geometry.normalize_rectangle(p1, p2) == geometry.normalize_rectangle(p2, p1)


def test_validate_in_bounds_includes_edges(geometry) -> None:
    bounds = geometry.compute_display_bounds(Canvas(400, 300), 800, 200)
    assert geometry.validate_in_bounds(Point(0, 100), Point(400, 200), bounds)
    assert not geometry.validate_in_bounds(Point(0, 99), Point(400, 200), bounds)
    assert not geometry.validate_in_bounds(Point(10, 150), Point(401, 150), bounds)
