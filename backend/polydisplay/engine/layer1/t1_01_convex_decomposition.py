"""T1.01: Convex Decomposition.

Triangulate-and-merge per polygon. A tessellator failure drops only that
polygon; the rest of the batch carries on.
"""

from __future__ import annotations

import logging

from polydisplay.engine.context import ConvertContext
from polydisplay.engine.registry import Layer, transform
from polydisplay.errors import PolyDisplayError
from polydisplay.geometry.decomposition import convex_decomposition

logger = logging.getLogger(__name__)


@transform(
    id="T1.01",
    layer=Layer.DECOMPOSE,
    dependencies=["T0.01"],
    description="Split each polygon into convex, hole-free pieces",
)
def decompose_polygons(ctx: ConvertContext) -> None:
    for pd in ctx.active_polygons():
        try:
            pd.pieces = convex_decomposition(pd.polygon)
        except PolyDisplayError as e:
            ctx.fail(pd, e)
            logger.warning("  %s decomposition FAILED: %s", pd.id, e)
            continue
        logger.debug("  %s: %d convex pieces", pd.id, len(pd.pieces))
