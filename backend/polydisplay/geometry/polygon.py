"""Polygon value type: outer ring, hole rings, fill colour and layer tag.

Orientation convention (y-up): the outer ring is counterclockwise, holes are
clockwise. ``is_counter_clockwise`` is the single source of truth for that and
every orientation-sensitive predicate goes through it.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from polydisplay.geometry import vec2
from polydisplay.geometry.vec2 import EPSILON, Vec2
from polydisplay.utils.geometry import as_array, bbox, signed_area

Ring = tuple[Vec2, ...]

DEFAULT_COLOR = "000000"

# Guard for the ray-casting division in point-in-polygon tests.
RAY_EPSILON = 1e-12


def _as_ring(points: Sequence[Sequence[float]]) -> Ring:
    return tuple((float(p[0]), float(p[1])) for p in points)


def _ring_edges(ring: Ring) -> Iterator[tuple[Vec2, Vec2]]:
    n = len(ring)
    for i in range(n):
        yield ring[i], ring[(i + 1) % n]


def _on_segment(p: Vec2, a: Vec2, b: Vec2) -> bool:
    """True when p lies on the closed segment ab (absolute tolerance)."""
    ab = vec2.sub(b, a)
    ap = vec2.sub(p, a)
    if abs(vec2.cross(ab, ap)) >= EPSILON:
        return False
    d = vec2.dot(ap, ab)
    return -EPSILON <= d <= vec2.dot(ab, ab) + EPSILON


def _on_ring(p: Vec2, ring: Ring) -> bool:
    return any(_on_segment(p, a, b) for a, b in _ring_edges(ring))


def _ray_cast(p: Vec2, ring: Ring) -> bool:
    """Even-odd containment of p against a single ring (boundary undefined)."""
    px, py = p
    inside = False
    n = len(ring)
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[i - 1]
        if (yi > py) != (yj > py):
            dy = yj - yi
            if abs(dy) < RAY_EPSILON:
                dy = RAY_EPSILON
            x_int = (xj - xi) * (py - yi) / dy + xi
            if px < x_int:
                inside = not inside
    return inside


def _blocks_segment(p: Vec2, q: Vec2, a: Vec2, b: Vec2) -> bool:
    """Does boundary edge ab stop segment pq from lying inside the region?

    Blocking cases: a proper crossing, a colinear overlap of positive length,
    or a boundary vertex strictly inside pq. Touching at an endpoint is fine.
    """
    d = vec2.sub(q, p)
    e = vec2.sub(b, a)
    o1 = vec2.cross(d, vec2.sub(a, p))
    o2 = vec2.cross(d, vec2.sub(b, p))
    o3 = vec2.cross(e, vec2.sub(p, a))
    o4 = vec2.cross(e, vec2.sub(q, a))

    straddles_pq = (o1 > EPSILON and o2 < -EPSILON) or (o1 < -EPSILON and o2 > EPSILON)
    straddles_ab = (o3 > EPSILON and o4 < -EPSILON) or (o3 < -EPSILON and o4 > EPSILON)
    if straddles_pq and straddles_ab:
        return True

    if abs(o1) < EPSILON and abs(o2) < EPSILON:
        dd = vec2.dot(d, d)
        if dd < EPSILON:
            return False
        ta = vec2.dot(vec2.sub(a, p), d) / dd
        tb = vec2.dot(vec2.sub(b, p), d) / dd
        lo, hi = min(ta, tb), max(ta, tb)
        overlap = (min(hi, 1.0) - max(lo, 0.0)) * math.sqrt(dd)
        return overlap > EPSILON

    for v in (a, b):
        if _on_segment(v, p, q) and not vec2.equal(v, p) and not vec2.equal(v, q):
            return True
    return False


@dataclass(frozen=True)
class Polygon:
    """A filled polygon with optional holes. Geometry never changes in place."""

    points: Ring
    holes: tuple[Ring, ...] = ()
    color: str = DEFAULT_COLOR
    layer: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _as_ring(self.points))
        object.__setattr__(self, "holes", tuple(_as_ring(h) for h in self.holes))

    # ---- Structure ----

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    def has_hole(self) -> bool:
        return len(self.holes) > 0

    @property
    def vertex_count(self) -> int:
        """Vertices of the outer ring plus every hole ring."""
        return len(self.points) + sum(len(h) for h in self.holes)

    def get_point(self, i: int) -> Vec2:
        """Vertex ``i`` with wrap-around (negative indices allowed)."""
        n = len(self.points)
        return self.points[i % n]

    def edges(self) -> Iterator[tuple[Vec2, Vec2]]:
        """Every boundary edge: outer ring first, then each hole."""
        yield from _ring_edges(self.points)
        for hole in self.holes:
            yield from _ring_edges(hole)

    def is_triangle(self) -> bool:
        return not self.has_hole() and len(self.points) == 3

    def is_trapezoid(self) -> bool:
        """Four points, no holes, at least one pair of opposite sides parallel."""
        if self.has_hole() or len(self.points) != 4:
            return False
        p0, p1, p2, p3 = self.points
        return vec2.is_parallel(vec2.sub(p1, p0), vec2.sub(p3, p2)) or vec2.is_parallel(
            vec2.sub(p2, p1), vec2.sub(p0, p3)
        )

    def is_parallelogram(self) -> bool:
        """Four points, no holes, both opposite side pairs parallel and equally long."""
        if self.has_hole() or len(self.points) != 4:
            return False
        p0, p1, p2, p3 = self.points
        v01 = vec2.sub(p1, p0)
        v23 = vec2.sub(p3, p2)
        v12 = vec2.sub(p2, p1)
        v30 = vec2.sub(p0, p3)
        return (
            vec2.is_parallel(v01, v23)
            and abs(vec2.length(v01) - vec2.length(v23)) < EPSILON
            and vec2.is_parallel(v12, v30)
            and abs(vec2.length(v12) - vec2.length(v30)) < EPSILON
        )

    # ---- Measures ----

    def get_area(self) -> float:
        """Outer area minus hole areas. Holes are trusted to be disjoint and contained."""
        area = abs(signed_area(as_array(self.points)))
        for hole in self.holes:
            area -= abs(signed_area(as_array(hole)))
        return area

    def bounds(self) -> tuple[float, float, float, float]:
        return bbox(as_array(self.points))

    def get_max_interior_angle_index(self) -> int:
        """Index of the vertex with the largest interior angle, or -1 if degenerate.

        Angles follow the ring's orientation, so reflex vertices measure above pi.
        """
        pts = self.points
        n = len(pts)
        if n < 3:
            return -1
        ccw = self.is_counter_clockwise(pts)
        best_index = -1
        best_angle = -math.inf
        for i in range(n):
            to_prev = vec2.sub(pts[i - 1], pts[i])
            to_next = vec2.sub(pts[(i + 1) % n], pts[i])
            angle = math.atan2(vec2.cross(to_next, to_prev), vec2.dot(to_next, to_prev))
            if not ccw:
                angle = -angle
            if angle < 0:
                angle += 2 * math.pi
            if angle > best_angle:
                best_angle = angle
                best_index = i
        return best_index

    # ---- Predicates ----

    def is_convex(self) -> bool:
        """CCW outer ring, no holes, no reflex vertex.

        A convex shape wound clockwise is reported non-convex; normalise first.
        """
        if not self.is_counter_clockwise(self.points):
            return False
        if self.has_hole():
            return False
        n = len(self.points)
        for i in range(n):
            if self.is_reflex(self.points[i - 1], self.points[i], self.points[(i + 1) % n]):
                return False
        return True

    def is_inside(self, point: Vec2) -> bool:
        """Boundary-inclusive containment honouring holes."""
        if _on_ring(point, self.points) or any(_on_ring(point, h) for h in self.holes):
            return True
        if not _ray_cast(point, self.points):
            return False
        return not any(_ray_cast(point, h) for h in self.holes)

    def is_segment_inside(self, p0: Vec2, p1: Vec2) -> bool:
        """True when the whole segment p0-p1 lies in the filled region."""
        if not (self.is_inside(p0) and self.is_inside(p1)):
            return False
        return not any(_blocks_segment(p0, p1, a, b) for a, b in self.edges())

    # ---- New values ----

    def simplify(self) -> Polygon:
        return Polygon(
            self.remove_colinear(self.points),
            tuple(self.remove_colinear(h) for h in self.holes),
            self.color,
            self.layer,
        )

    def reverse(self) -> Polygon:
        """Same region with every ring traversed the other way."""
        return Polygon(
            tuple(reversed(self.points)),
            tuple(tuple(reversed(h)) for h in self.holes),
            self.color,
            self.layer,
        )

    def normalized(self) -> Polygon:
        """Outer ring CCW, hole rings CW."""
        points = self.points
        if not self.is_counter_clockwise(points):
            points = tuple(reversed(points))
        holes = tuple(tuple(reversed(h)) if self.is_counter_clockwise(h) else h for h in self.holes)
        return Polygon(points, holes, self.color, self.layer)

    def clone(self) -> Polygon:
        return Polygon(self.points, self.holes, self.color, self.layer)

    # ---- Ring helpers ----

    @staticmethod
    def is_counter_clockwise(points: Sequence[Vec2]) -> bool:
        total = 0.0
        n = len(points)
        for i in range(n):
            x1, y1 = points[i]
            x2, y2 = points[(i + 1) % n]
            total += (x2 - x1) * (y2 + y1)
        return total < 0

    @staticmethod
    def is_reflex(p1: Vec2, p2: Vec2, p3: Vec2) -> bool:
        """p2 turns clockwise between p1 and p3 (assumes a CCW ring)."""
        return vec2.cross(vec2.sub(p2, p1), vec2.sub(p3, p2)) < -EPSILON

    @staticmethod
    def remove_colinear(points: Sequence[Vec2]) -> Ring:
        """Drop every vertex that is colinear with its two neighbours."""
        n = len(points)
        if n < 3:
            return _as_ring(points)
        kept = []
        for i in range(n):
            prev, cur, nxt = points[i - 1], points[i], points[(i + 1) % n]
            if abs(vec2.cross(vec2.sub(cur, prev), vec2.sub(nxt, cur))) < EPSILON:
                continue
            kept.append(cur)
        return _as_ring(kept)
