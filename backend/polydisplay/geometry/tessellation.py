"""Triangulation of multi-contour polygons via mapbox_earcut (holes handled natively)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import mapbox_earcut
import numpy as np

from polydisplay.geometry.vec2 import Vec2

logger = logging.getLogger(__name__)

Triangle = tuple[Vec2, Vec2, Vec2]


def triangulate(rings: Sequence[Sequence[Vec2]]) -> list[Triangle]:
    """Triangulate an outer ring followed by its hole rings.

    Returns non-overlapping triangles covering the enclosed region. Errors
    raised by earcut are not caught here.
    """
    rings = [r for r in rings if len(r) > 0]
    if not rings:
        return []

    verts = np.array([pt for ring in rings for pt in ring], dtype=np.float64).reshape(-1, 2)
    # earcut wants the cumulative end index of every ring
    ring_ends = np.cumsum([len(r) for r in rings]).astype(np.uint32)

    indices = np.asarray(mapbox_earcut.triangulate_float64(verts, ring_ends), dtype=np.int64)
    triangles: list[Triangle] = []
    for i in range(0, len(indices) - 2, 3):
        a, b, c = verts[indices[i]], verts[indices[i + 1]], verts[indices[i + 2]]
        triangles.append(
            (
                (float(a[0]), float(a[1])),
                (float(b[0]), float(b[1])),
                (float(c[0]), float(c[1])),
            )
        )

    logger.debug("Tessellated %d rings (%d vertices) into %d triangles", len(rings), len(verts), len(triangles))
    return triangles
