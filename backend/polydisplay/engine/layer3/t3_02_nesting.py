"""T3.02: Nesting.

All per-polygon trees folded into one root in input order, which is also the
draw order of the result.
"""

from __future__ import annotations

import logging

from polydisplay.display.display import Display
from polydisplay.engine.context import ConvertContext
from polydisplay.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


@transform(
    id="T3.02",
    layer=Layer.ASSEMBLE,
    dependencies=["T2.01"],
    description="Nest every polygon's displays under one root",
)
def nest_polygons(ctx: ConvertContext) -> None:
    trees = [pd.display for pd in ctx.active_polygons() if pd.display is not None]
    if not trees:
        ctx.root = None
        logger.info("Nothing to nest: no polygon produced displays")
        return
    ctx.root = Display.nested_display(trees)
