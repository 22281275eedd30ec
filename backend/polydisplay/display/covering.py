"""Greedy parallelogram covering (opt-in, far slower than the fan strategy).

Every vertex triple of the piece proposes its three parallelogram completions
(kept only when they stay inside the boundary) and its three half-side wedges
(always inside a convex piece). The candidate covering the most still-uncovered
area is taken until the piece is covered or nothing gains area any more.
Cubic in vertex count; coverage is scored with vectorized shapely calls.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

import numpy as np
import shapely

from polydisplay.display.conversion import half_side_displays, require_convex
from polydisplay.display.display import Display
from polydisplay.errors import UnreachableCover
from polydisplay.geometry import vec2
from polydisplay.geometry.clipping import areal, to_shapely
from polydisplay.geometry.polygon import Polygon

logger = logging.getLogger(__name__)


@dataclass
class CoverResult:
    display: Display | None
    covered_area: float
    target_area: float
    complete: bool

    @property
    def coverage(self) -> float:
        if self.target_area <= 0:
            return 1.0
        return self.covered_area / self.target_area


def _candidates(polygon: Polygon) -> tuple[list[Display], list[Display]]:
    """(completions, wedges) for every non-degenerate vertex triple."""
    completions = []
    wedges = []
    for p, q, r in itertools.combinations(polygon.points, 3):
        if abs(vec2.cross(vec2.sub(q, p), vec2.sub(r, p))) < vec2.EPSILON:
            continue
        for a, b, c in ((p, q, r), (q, r, p), (r, p, q)):
            completions.append(Display(c, (vec2.sub(b, c), vec2.sub(a, c))))
        wedges.extend(half_side_displays((p, q, r)))
    return completions, wedges


def _quads(displays: list[Display]) -> np.ndarray:
    """Shapely polygon array, one quad per display."""
    coords = np.array([d.get_vertices() for d in displays], dtype=np.float64).reshape(-1, 4, 2)
    closed = np.concatenate([coords, coords[:, :1, :]], axis=1)
    return shapely.polygons(closed)


def greedy_cover(
    polygon: Polygon,
    boundary: Polygon | None = None,
    tolerance: float = 1e-6,
    strict: bool = False,
) -> CoverResult:
    """Cover a convex piece with as few parallelograms as the greedy pick allows.

    ``tolerance`` is relative to the piece area, both for accepting a
    completion as inside the boundary and for calling the cover complete.

    Raises:
        InvalidGeometry: the piece is not convex.
        UnreachableCover: ``strict`` and some area is left uncovered; the
            partial result rides on the exception.
    """
    require_convex(polygon)
    boundary = boundary if boundary is not None else polygon

    target = areal(to_shapely(polygon))
    boundary_geom = areal(to_shapely(boundary))
    target_area = float(target.area)
    slack = tolerance * target_area

    completions, wedges = _candidates(polygon)
    pool = completions + wedges
    if not pool:
        result = CoverResult(None, 0.0, target_area, target_area <= slack)
        if strict and not result.complete:
            raise UnreachableCover("Polygon offers no candidate parallelogram", result)
        return result

    quads = _quads(pool)
    quad_area = shapely.area(quads)
    spill = shapely.area(shapely.difference(quads, boundary_geom))
    inside = spill <= tolerance * np.maximum(quad_area, target_area)
    # half-side wedges lie inside the piece by construction
    inside[len(completions):] = True
    candidates = [d for d, ok in zip(pool, inside) if ok]
    quads = quads[inside]

    remaining = target
    picked: list[Display] = []
    while remaining.area > slack:
        gains = shapely.area(shapely.intersection(quads, remaining))
        best = int(np.argmax(gains))
        if gains[best] <= slack:
            break
        picked.append(candidates[best].clone())
        remaining = remaining.difference(quads[best])

    covered = target_area - float(remaining.area)
    complete = float(remaining.area) <= slack
    display = Display.nested_display(picked) if picked else None
    result = CoverResult(display, covered, target_area, complete)

    logger.debug(
        "Greedy cover: %d candidates, %d picked, %.1f%% covered",
        len(candidates),
        len(picked),
        100.0 * result.coverage,
    )
    if not complete:
        logger.warning(
            "Greedy cover stopped at %.4f of %.4f area (%d displays)",
            covered,
            target_area,
            len(picked),
        )
        if strict:
            raise UnreachableCover(
                f"Greedy cover left {target_area - covered:.6g} of {target_area:.6g} area uncovered",
                result,
            )
    return result
