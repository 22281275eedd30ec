"""T2.01: Display Conversion.

Each convex piece becomes a display subtree; a polygon's subtrees are nested
in piece order. With ``use_boundary`` the whole (concave, holed) polygon is
the segment-inside boundary, so completions may leave their piece as long as
they stay inside the real outline.
"""

from __future__ import annotations

import logging

from polydisplay.display.conversion import polygon_to_display
from polydisplay.display.display import Display
from polydisplay.engine.context import ConvertContext
from polydisplay.engine.registry import Layer, transform
from polydisplay.errors import UnreachableCover

logger = logging.getLogger(__name__)


@transform(
    id="T2.01",
    layer=Layer.CONVERT,
    dependencies=["T1.01"],
    description="Convert convex pieces into parallelogram displays",
)
def convert_pieces(ctx: ConvertContext) -> None:
    cfg = ctx.config
    for pd in ctx.active_polygons():
        displays: list[Display] = []
        try:
            for piece in pd.pieces:
                boundary = pd.polygon if cfg.use_boundary else piece
                try:
                    display = polygon_to_display(
                        piece,
                        boundary,
                        cfg.strategy,
                        cover_tolerance=cfg.cover_tolerance,
                        strict=True,
                    )
                except UnreachableCover as e:
                    ctx.warnings.append(f"{pd.id}: {e}")
                    display = e.result.display
                if display is not None:
                    displays.append(display)
        except Exception as e:
            ctx.fail(pd, e)
            logger.warning("  %s conversion FAILED: %s", pd.id, e)
            continue

        if displays:
            pd.display = Display.nested_display(displays)
        logger.debug("  %s: %d pieces -> %d displays", pd.id, len(pd.pieces), pd.display_count)
