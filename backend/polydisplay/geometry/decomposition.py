"""Convex decomposition: triangulate, then greedily merge adjacent pieces.

Hertel-Mehlhorn style. The merge scan is first-fit in row-major pair order, so
the exact pieces depend on the triangulation; only their union, total area
and convexity are guaranteed.
"""

from __future__ import annotations

import logging

from polydisplay.errors import DecompositionFailure
from polydisplay.geometry import vec2
from polydisplay.geometry.polygon import Polygon, Ring
from polydisplay.geometry.tessellation import triangulate

logger = logging.getLogger(__name__)


def _index_of(ring: Ring, point: vec2.Vec2) -> int:
    for i, p in enumerate(ring):
        if vec2.equal(p, point):
            return i
    return -1


def _shared_edge(a: Ring, b: Ring) -> tuple[int, int] | None:
    """Locate the single edge a[i] -> a[i+1] that b traverses as b[j] -> b[j+1] reversed.

    Returns (i, j) where a[i] == b[j+1] and a[i+1] == b[j], or None unless the
    rings share exactly two vertices joined by such an edge.
    """
    shared = []
    for i, p in enumerate(a):
        j = _index_of(b, p)
        if j >= 0:
            shared.append((i, j))
    if len(shared) != 2:
        return None

    na, nb = len(a), len(b)
    (i0, j0), (i1, j1) = shared
    if (i0 + 1) % na == i1:
        i, u_in_b, v_in_b = i0, j0, j1
    elif (i1 + 1) % na == i0:
        i, u_in_b, v_in_b = i1, j1, j0
    else:
        return None

    # a runs u -> v, so b must run v -> u for the pieces to lie on opposite sides
    if (v_in_b + 1) % nb != u_in_b:
        return None
    return i, v_in_b


def merge_pieces(a: Polygon, b: Polygon) -> Polygon | None:
    """Splice two pieces across their shared edge, or None if they share no single edge."""
    edge = _shared_edge(a.points, b.points)
    if edge is None:
        return None
    i, j = edge
    na, nb = len(a.points), len(b.points)
    ring = [a.points[(i + 1 + k) % na] for k in range(na)]
    ring += [b.points[(j + 2 + k) % nb] for k in range(nb - 2)]
    return Polygon(tuple(ring), (), a.color, a.layer)


def _triangle_pieces(polygon: Polygon) -> list[Polygon]:
    try:
        triangles = triangulate([polygon.points, *polygon.holes])
    except Exception as e:
        raise DecompositionFailure(f"tessellation failed: {e}") from e

    pieces = []
    for tri in triangles:
        piece = Polygon(tri, (), polygon.color, polygon.layer)
        if not Polygon.is_counter_clockwise(piece.points):
            piece = piece.reverse()
        # zero-area slivers fail the orientation test even after reversing
        if piece.is_convex():
            pieces.append(piece)

    if not pieces:
        raise DecompositionFailure(
            f"tessellation produced no usable triangle for a {len(polygon.points)}-point polygon"
        )
    return pieces


def convex_decomposition(polygon: Polygon) -> list[Polygon]:
    """Split ``polygon`` into convex, hole-free, CCW pieces covering the same region."""
    if polygon.is_triangle() or polygon.is_convex():
        return [polygon]

    pieces = _triangle_pieces(polygon)
    n_triangles = len(pieces)

    merged = True
    while merged:
        merged = False
        for i in range(len(pieces)):
            for j in range(i + 1, len(pieces)):
                candidate = merge_pieces(pieces[i], pieces[j])
                if candidate is None or not candidate.is_convex():
                    continue
                pieces[i] = candidate.simplify()
                del pieces[j]
                merged = True
                break
            if merged:
                break

    logger.debug("Decomposed %d-point polygon: %d triangles -> %d convex pieces",
                 len(polygon.points), n_triangles, len(pieces))
    return pieces
