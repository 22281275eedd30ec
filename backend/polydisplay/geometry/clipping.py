"""Shapely bridge for the polygon boolean work: ring merging and conversions.

Every result is zero or more ``Polygon`` values (outer ring + holes), outer
rings CCW and holes CW.
"""

from __future__ import annotations

from collections.abc import Sequence

from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.ops import unary_union
from shapely.validation import make_valid

from polydisplay.geometry.polygon import DEFAULT_COLOR, Polygon
from polydisplay.geometry.vec2 import Vec2
from polydisplay.utils.geometry import as_array, drop_closing_point


def to_shapely(polygon: Polygon) -> ShapelyPolygon:
    return ShapelyPolygon(polygon.points, polygon.holes)


def _polygonal_parts(geom: BaseGeometry) -> list[ShapelyPolygon]:
    if geom.is_empty:
        return []
    if geom.geom_type == "Polygon":
        return [geom]
    if hasattr(geom, "geoms"):
        return [p for g in geom.geoms for p in _polygonal_parts(g)]
    return []


def areal(geom: BaseGeometry) -> BaseGeometry:
    """Repair ``geom`` and keep only its areal parts (overlays reject mixed dimensions)."""
    return unary_union(_polygonal_parts(make_valid(geom)))


def _ring_coords(coords) -> tuple[Vec2, ...]:
    pts = drop_closing_point(as_array(list(coords)))
    return tuple((float(x), float(y)) for x, y in pts)


def from_shapely(geom: BaseGeometry, color: str = DEFAULT_COLOR, layer: int = 0) -> list[Polygon]:
    """Explode any shapely geometry into Polygons, dropping non-areal parts."""
    result = []
    for part in _polygonal_parts(geom):
        part = orient(part, sign=1.0)
        result.append(
            Polygon(
                _ring_coords(part.exterior.coords),
                tuple(_ring_coords(r.coords) for r in part.interiors),
                color,
                layer,
            )
        )
    return result


def xor_rings(
    rings: Sequence[Sequence[Vec2]],
    color: str = DEFAULT_COLOR,
    layer: int = 0,
) -> list[Polygon]:
    """Merge the rings of one filled element even-odd style.

    A ring nested inside another becomes a hole; overlapping rings cancel
    where they overlap.
    """
    merged: BaseGeometry = ShapelyPolygon()
    for ring in rings:
        if len(ring) < 3:
            continue
        merged = merged.symmetric_difference(areal(ShapelyPolygon(ring)))
    return from_shapely(merged, color, layer)
