"""T0.01: Simplify + Orientation.

Outer ring made counterclockwise, holes clockwise, colinear vertices dropped.
The result is the polygon every later stage works on and the boundary that
candidate parallelogram edges are tested against.
"""

from __future__ import annotations

import logging

from polydisplay.engine.context import ConvertContext
from polydisplay.engine.registry import Layer, transform
from polydisplay.errors import InvalidGeometry
from polydisplay.geometry.polygon import Polygon

logger = logging.getLogger(__name__)


@transform(
    id="T0.01",
    layer=Layer.PREPARE,
    description="Normalise ring orientation and remove colinear vertices",
)
def prepare_polygons(ctx: ConvertContext) -> None:
    for pd in ctx.active_polygons():
        poly = pd.source.normalized().simplify()
        if len(poly.points) < 3:
            ctx.fail(pd, InvalidGeometry(f"{len(poly.points)} distinct corners left after simplification"))
            logger.warning("  %s skipped: degenerate outline", pd.id)
            continue

        holes = tuple(h for h in poly.holes if len(h) >= 3)
        if len(holes) != len(poly.holes):
            logger.debug("  %s: dropped %d degenerate holes", pd.id, len(poly.holes) - len(holes))
            poly = Polygon(poly.points, holes, poly.color, poly.layer)
        pd.polygon = poly
