"""Shared test fixtures."""

from __future__ import annotations

import pytest
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import unary_union

from polydisplay.display.display import Display
from polydisplay.geometry.polygon import Polygon


UNIT_SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]

L_SHAPE = [(0.0, 0.0), (2.0, 0.0), (2.0, 1.0), (1.0, 1.0), (1.0, 2.0), (0.0, 2.0)]

# 4x4 square with a clockwise 2x2 hole in the middle
FRAME_OUTER = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]
FRAME_HOLE = [(1.0, 1.0), (1.0, 3.0), (3.0, 3.0), (3.0, 1.0)]

RIGHT_TRIANGLE = [(0.0, 0.0), (4.0, 0.0), (0.0, 4.0)]
ACUTE_TRIANGLE = [(0.0, 0.0), (4.0, 0.0), (2.0, 3.0)]

HEXAGON = [(2.0, 0.0), (1.0, 1.7320508075688772), (-1.0, 1.7320508075688772),
           (-2.0, 0.0), (-1.0, -1.7320508075688772), (1.0, -1.7320508075688772)]


FILLED_RECT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <rect x="10" y="10" width="80" height="80" fill="#4ECDC4"/>
  <circle cx="50" cy="50" r="20" fill="#FF6B6B"/>
</svg>'''

FRAME_PATH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">
  <path d="M0 0 L10 0 L10 10 L0 10 Z M3 3 L7 3 L7 7 L3 7 Z" fill="#000"/>
</svg>'''

STROKE_ONLY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke="currentColor">
  <circle cx="12" cy="12" r="10"/>
  <path d="M4 4 L20 4 L20 20 Z"/>
</svg>'''


def square(x0: float, y0: float, size: float, color: str = "000000", layer: int = 0) -> Polygon:
    return Polygon(
        ((x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)),
        color=color,
        layer=layer,
    )


def quad_union(display: Display):
    """Shapely union of every primitive quad in a display tree."""
    return unary_union([ShapelyPolygon(d.get_vertices()) for d in display.walk()])


@pytest.fixture
def unit_square() -> Polygon:
    return Polygon(UNIT_SQUARE)


@pytest.fixture
def l_shape() -> Polygon:
    return Polygon(L_SHAPE)


@pytest.fixture
def frame() -> Polygon:
    return Polygon(FRAME_OUTER, (FRAME_HOLE,))


@pytest.fixture
def hexagon() -> Polygon:
    return Polygon(HEXAGON)


@pytest.fixture
def filled_rect_svg() -> str:
    return FILLED_RECT_SVG
