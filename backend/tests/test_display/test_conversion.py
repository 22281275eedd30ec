"""Tests for convex polygon -> display conversion (fan strategy)."""

from __future__ import annotations

import pytest
from shapely.geometry import Point
from shapely.geometry import Polygon as ShapelyPolygon

from polydisplay.display.conversion import polygon_to_display, triangle_to_display
from polydisplay.errors import InvalidGeometry
from polydisplay.geometry.polygon import Polygon
from tests.conftest import ACUTE_TRIANGLE, RIGHT_TRIANGLE, UNIT_SQUARE, quad_union


def _box(x0: float, y0: float, x1: float, y1: float) -> list[tuple[float, float]]:
    return [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]


def _cw_box(x0: float, y0: float, x1: float, y1: float) -> list[tuple[float, float]]:
    return list(reversed(_box(x0, y0, x1, y1)))


RIGHT_TRIANGLE_8 = [(0.0, 0.0), (8.0, 0.0), (0.0, 8.0)]


def test_unit_square_is_one_parallelogram(unit_square):
    display = polygon_to_display(unit_square)
    assert display.get_total_display_count() == 1
    assert display.get_absolute_position() == (1.0, 0.0)
    assert display.sides == ((-1.0, 0.0), (0.0, 1.0))


def test_skewed_parallelogram():
    poly = Polygon(((0, 0), (2, 0), (3, 1), (1, 1)))
    display = polygon_to_display(poly)
    assert display.get_total_display_count() == 1
    assert quad_union(display).symmetric_difference(ShapelyPolygon(poly.points)).area == pytest.approx(0.0, abs=1e-9)


def test_right_triangle_completes_inside_larger_boundary():
    triangle = Polygon(RIGHT_TRIANGLE)
    boundary = Polygon(_box(-1, -1, 5, 5))
    display = polygon_to_display(triangle, boundary)
    assert display.get_total_display_count() == 1
    assert display.get_absolute_position() == (0.0, 0.0)
    assert set(display.sides) == {(4.0, 0.0), (0.0, 4.0)}


def test_triangle_against_itself_falls_back():
    display = polygon_to_display(Polygon(RIGHT_TRIANGLE))
    assert display.get_total_display_count() == 3


def test_acute_triangle_blocked_by_holes():
    triangle = Polygon(ACUTE_TRIANGLE)
    # a small hole around each completion point: (2, -3), (6, 3), (-2, 3)
    holes = (_cw_box(1.5, -3.5, 2.5, -2.5), _cw_box(5.5, 2.5, 6.5, 3.5), _cw_box(-2.5, 2.5, -1.5, 3.5))
    boundary = Polygon(_box(-10, -10, 10, 10), holes)
    display = polygon_to_display(triangle, boundary)
    assert display.get_total_display_count() == 3
    assert quad_union(display).symmetric_difference(ShapelyPolygon(ACUTE_TRIANGLE)).area == pytest.approx(0.0, abs=1e-9)


def test_hole_inside_added_half_blocks_completion():
    # (8, 8) completes the triangle inside the box, but the added half holds a hole
    triangle = Polygon(RIGHT_TRIANGLE_8)
    boundary = Polygon(_box(0, 0, 10, 10), (_cw_box(5, 5, 5.5, 5.5),))
    display = polygon_to_display(triangle, boundary)
    assert display.get_total_display_count() == 3
    union = quad_union(display)
    assert not union.contains(Point(5.25, 5.25))
    assert union.symmetric_difference(ShapelyPolygon(RIGHT_TRIANGLE_8)).area == pytest.approx(0.0, abs=1e-9)


def test_same_completion_accepted_without_the_hole():
    display = polygon_to_display(Polygon(RIGHT_TRIANGLE_8), Polygon(_box(0, 0, 10, 10)))
    assert display.get_total_display_count() == 1
    assert quad_union(display).area == pytest.approx(64.0)


def test_acute_triangle_completes_without_holes():
    display = polygon_to_display(Polygon(ACUTE_TRIANGLE), Polygon(_box(-10, -10, 10, 10)))
    assert display.get_total_display_count() == 1


def test_triangle_fallback_wedges():
    display = triangle_to_display(ACUTE_TRIANGLE)
    assert display.get_total_display_count() == 3
    anchors = [d.get_absolute_position() for d in display.walk()]
    assert anchors == ACUTE_TRIANGLE
    assert display.sides == ((2.0, 0.0), (1.0, 1.5))


def test_hexagon_fan_covers_exactly(hexagon):
    display = polygon_to_display(hexagon)
    union = quad_union(display)
    target = ShapelyPolygon(hexagon.points)
    assert union.difference(target).area == pytest.approx(0.0, abs=1e-9)
    assert target.difference(union).area == pytest.approx(0.0, abs=1e-9)
    for d in display.walk():
        for v in d.get_vertices():
            assert hexagon.is_inside(v)


def test_completion_may_use_outer_boundary(l_shape):
    # corner triangle of the L: its completion is the unit square, outside the triangle but inside the L
    tri = Polygon(((0, 0), (1, 0), (0, 1)))
    assert polygon_to_display(tri).get_total_display_count() == 3
    display = polygon_to_display(tri, l_shape)
    assert display.get_total_display_count() == 1
    assert display.get_absolute_position() == (0.0, 0.0)


class TestValidation:
    def test_too_few_points(self):
        with pytest.raises(InvalidGeometry):
            polygon_to_display(Polygon(((0, 0), (1, 1))))

    def test_concave(self, l_shape):
        with pytest.raises(InvalidGeometry):
            polygon_to_display(l_shape)

    def test_clockwise(self):
        with pytest.raises(InvalidGeometry):
            polygon_to_display(Polygon(list(reversed(UNIT_SQUARE))))

    def test_invalid_geometry_is_value_error(self, l_shape):
        with pytest.raises(ValueError):
            polygon_to_display(l_shape)
