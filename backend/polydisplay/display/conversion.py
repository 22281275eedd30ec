"""Convex polygon -> Display tree.

Default strategy is a fixed-apex fan: every edge not touching the apex forms a
triangular wedge, covered by a single completed parallelogram when that stays
inside the boundary, otherwise by three half-side displays that always do.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence

from polydisplay.display.display import Display
from polydisplay.errors import InvalidGeometry
from polydisplay.geometry import vec2
from polydisplay.geometry.polygon import Polygon
from polydisplay.geometry.vec2 import EPSILON, Vec2

logger = logging.getLogger(__name__)


class Strategy(enum.StrEnum):
    FAN = "fan"
    GREEDY = "greedy"


def require_convex(polygon: Polygon) -> None:
    if len(polygon.points) < 3:
        raise InvalidGeometry(f"Polygon has {len(polygon.points)} points, need at least 3")
    if not polygon.is_convex():
        raise InvalidGeometry("Polygon is not convex (or not counterclockwise)")


def completion_point(a: Vec2, b: Vec2, c: Vec2) -> Vec2:
    """Fourth vertex d of the parallelogram c -> b -> d -> a."""
    return vec2.add(a, vec2.sub(b, c))


def _strictly_inside_triangle(p: Vec2, a: Vec2, b: Vec2, c: Vec2) -> bool:
    d1 = vec2.cross(vec2.sub(b, a), vec2.sub(p, a))
    d2 = vec2.cross(vec2.sub(c, b), vec2.sub(p, b))
    d3 = vec2.cross(vec2.sub(a, c), vec2.sub(p, c))
    return (d1 > EPSILON and d2 > EPSILON and d3 > EPSILON) or (d1 < -EPSILON and d2 < -EPSILON and d3 < -EPSILON)


def complete_parallelogram(a: Vec2, b: Vec2, c: Vec2, boundary: Polygon) -> Display | None:
    """Cover triangle abc with the parallelogram anchored at c, if the added half b-d-a stays inside.

    Both new edges must pass the segment test, and no boundary vertex (outer
    ring or hole) may sit strictly inside b-d-a.
    """
    d = completion_point(a, b, c)
    if not (boundary.is_segment_inside(b, d) and boundary.is_segment_inside(a, d)):
        return None
    for ring in (boundary.points, *boundary.holes):
        if any(_strictly_inside_triangle(v, b, d, a) for v in ring):
            return None
    return Display(c, (vec2.sub(b, c), vec2.sub(a, c)))


def half_side_displays(triangle: Sequence[Vec2]) -> list[Display]:
    """Three displays, one per vertex, spanning half of each adjacent side."""
    displays = []
    for i, p in enumerate(triangle):
        q = triangle[(i + 1) % 3]
        r = triangle[(i + 2) % 3]
        displays.append(Display(p, (vec2.scale(vec2.sub(q, p), 0.5), vec2.scale(vec2.sub(r, p), 0.5))))
    return displays


def triangle_to_display(triangle: Sequence[Vec2]) -> Display:
    return Display.nested_display(half_side_displays(triangle))


def _triangle_candidates(p0: Vec2, p1: Vec2, p2: Vec2) -> list[tuple[Vec2, Vec2, Vec2]]:
    # pA = p0 + (p1 - p2), pB = p1 + (p2 - p0), pC = p2 + (p0 - p1)
    return [(p0, p1, p2), (p1, p2, p0), (p2, p0, p1)]


def _cover_triangle(candidates, triangle: Sequence[Vec2], boundary: Polygon) -> list[Display]:
    for a, b, c in candidates:
        display = complete_parallelogram(a, b, c, boundary)
        if display is not None:
            return [display]
    return [triangle_to_display(triangle)]


def _fan_displays(polygon: Polygon, boundary: Polygon) -> list[Display]:
    pts = polygon.points
    n = len(pts)

    if polygon.is_triangle():
        p0, p1, p2 = pts
        return _cover_triangle(_triangle_candidates(p0, p1, p2), pts, boundary)

    if polygon.is_parallelogram():
        p0, p1, p2, _ = pts
        return [Display(p1, (vec2.sub(p0, p1), vec2.sub(p2, p1)))]

    apex_index = polygon.get_max_interior_angle_index()
    apex = pts[apex_index]
    displays = []
    for k in range(1, n - 1):
        p1 = pts[(apex_index + k) % n]
        p2 = pts[(apex_index + k + 1) % n]
        candidates = [(apex, p1, p2), (apex, p2, p1)]
        displays.extend(_cover_triangle(candidates, (apex, p1, p2), boundary))
    return displays


def polygon_to_display(
    polygon: Polygon,
    boundary: Polygon | None = None,
    strategy: Strategy | str = Strategy.FAN,
    *,
    cover_tolerance: float = 1e-6,
    strict: bool = False,
) -> Display:
    """Convert one convex, CCW polygon into a nested Display tree.

    ``boundary`` (default: the polygon itself) is what candidate edges are
    tested against; pass the original concave shape to let parallelograms
    reach outside the convex piece without leaving the real outline.

    Raises:
        InvalidGeometry: fewer than 3 points, or not convex.
        UnreachableCover: greedy strategy with ``strict=True`` left area uncovered.
    """
    require_convex(polygon)
    boundary = boundary if boundary is not None else polygon

    if Strategy(strategy) == Strategy.GREEDY:
        from polydisplay.display.covering import greedy_cover

        result = greedy_cover(polygon, boundary, tolerance=cover_tolerance, strict=strict)
        if result.display is None:
            raise InvalidGeometry("Polygon has no coverable area")
        return result.display

    root = Display.nested_display(_fan_displays(polygon, boundary))
    logger.debug("Converted %d-point polygon into %d displays", len(polygon.points), root.get_total_display_count())
    return root
