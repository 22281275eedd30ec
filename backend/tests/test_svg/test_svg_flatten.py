"""Tests for SVG flattening into polygons."""

from __future__ import annotations

import math

import pytest

from polydisplay.geometry.polygon import Polygon
from polydisplay.svg.parser import parse_svg
from tests.conftest import FRAME_PATH_SVG, STROKE_ONLY_SVG


def _svg(body: str) -> str:
    return f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">{body}</svg>'


def test_rect_and_circle(filled_rect_svg):
    polygons = parse_svg(filled_rect_svg)
    assert len(polygons) == 2

    rect, circle = polygons
    assert rect.color == "4ecdc4"
    assert rect.layer == 0
    assert rect.vertex_count == 4
    assert rect.get_area() == pytest.approx(6400.0)

    assert circle.color == "ff6b6b"
    assert circle.layer == 1
    assert circle.get_area() == pytest.approx(math.pi * 400, rel=0.02)


def test_compound_path_becomes_hole():
    polygons = parse_svg(FRAME_PATH_SVG)
    assert len(polygons) == 1
    assert polygons[0].hole_count == 1
    assert polygons[0].get_area() == pytest.approx(84.0)
    assert polygons[0].color == "000000"


def test_unfilled_elements_skipped():
    assert parse_svg(STROKE_ONLY_SVG) == []


def test_polygon_element_drops_colinear_points():
    polygons = parse_svg(_svg('<polygon points="0,0 5,0 10,0 10,10 0,10" fill="blue"/>'))
    assert len(polygons) == 1
    assert polygons[0].vertex_count == 4
    assert polygons[0].color == "0000ff"


@pytest.mark.parametrize(
    "attrs, expected",
    [
        ('style="fill: #00ff00; stroke: none"', "00ff00"),
        ('fill="rgb(0, 128, 255)"', "0080ff"),
        ('fill="#ABC"', "aabbcc"),
        ("", "000000"),
    ],
)
def test_fill_forms(attrs, expected):
    polygons = parse_svg(_svg(f'<rect x="0" y="0" width="10" height="10" {attrs}/>'))
    assert polygons[0].color == expected


def test_curves_are_sampled():
    polygons = parse_svg(_svg('<path d="M0 0 Q5 10 10 0 Z"/>'))
    assert len(polygons) == 1
    # parabolic segment area is 2/3 * base * height
    assert 30.0 < polygons[0].get_area() < 100.0 / 3 + 1e-6
    assert polygons[0].vertex_count > 10


def test_finer_sampling_gives_more_points():
    coarse = parse_svg(_svg('<circle cx="0" cy="0" r="5"/>'), sample_rate=10.0)[0]
    fine = parse_svg(_svg('<circle cx="0" cy="0" r="5"/>'), sample_rate=1.0)[0]
    assert fine.vertex_count > coarse.vertex_count


def test_empty_and_degenerate_elements():
    svg = _svg('<path d=""/><rect width="0" height="5"/><circle r="0"/>')
    assert parse_svg(svg) == []


def test_rejects_bad_sample_rate():
    with pytest.raises(ValueError):
        parse_svg(FRAME_PATH_SVG, sample_rate=0)


class TestInheritedFill:
    def test_group_fill_reaches_children(self):
        svg = _svg('<g fill="#ff0000"><rect width="10" height="10"/><rect x="20" width="10" height="10" fill="blue"/></g>')
        assert [p.color for p in parse_svg(svg)] == ["ff0000", "0000ff"]

    def test_group_style_fill(self):
        svg = _svg('<g style="stroke: black; fill: #00ff00"><g><circle r="5"/></g></g>')
        assert parse_svg(svg)[0].color == "00ff00"

    def test_child_can_refill_unfilled_group(self):
        svg = _svg('<g fill="none"><rect width="10" height="10"/><rect width="5" height="5" fill="red"/></g>')
        polygons = parse_svg(svg)
        assert len(polygons) == 1
        assert polygons[0].color == "ff0000"
        assert polygons[0].layer == 1

    def test_scope_ends_with_group(self):
        svg = _svg('<g fill="none"><rect width="10" height="10"/></g><rect width="4" height="4"/>')
        polygons = parse_svg(svg)
        assert len(polygons) == 1
        assert polygons[0].color == "000000"
        assert polygons[0].get_area() == pytest.approx(16.0)

    def test_definitions_not_drawn(self):
        svg = _svg('<defs><rect id="r" width="10" height="10"/></defs><!-- <rect width="3" height="3"/> -->')
        assert parse_svg(svg) == []


class TestTransforms:
    def test_element_translate(self):
        svg = _svg('<rect width="10" height="10" transform="translate(100,0)"/>')
        assert parse_svg(svg)[0].bounds() == pytest.approx((100.0, 0.0, 110.0, 10.0))

    def test_group_and_element_compose(self):
        svg = _svg('<g transform="scale(2)"><rect width="10" height="10" transform="translate(5, 0)"/></g>')
        poly = parse_svg(svg)[0]
        assert poly.bounds() == pytest.approx((10.0, 0.0, 30.0, 20.0))
        assert poly.get_area() == pytest.approx(400.0)

    def test_mirroring_keeps_outer_ring_ccw(self):
        svg = _svg('<path d="M0 0 L10 0 L10 10 L0 10 Z M3 3 L7 3 L7 7 L3 7 Z" transform="scale(-1, 1)"/>')
        poly = parse_svg(svg)[0]
        assert Polygon.is_counter_clockwise(poly.points)
        assert poly.hole_count == 1
        assert poly.bounds() == pytest.approx((-10.0, 0.0, 0.0, 10.0))

    def test_transform_ends_with_group(self):
        svg = _svg('<g transform="translate(50, 50)"><rect width="1" height="1"/></g><rect width="1" height="1"/>')
        first, second = parse_svg(svg)
        assert first.bounds() == pytest.approx((50.0, 50.0, 51.0, 51.0))
        assert second.bounds() == pytest.approx((0.0, 0.0, 1.0, 1.0))
