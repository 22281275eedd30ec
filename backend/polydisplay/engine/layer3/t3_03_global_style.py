"""T3.03: Global Styling.

Type, block or colour, and depth cascade from the root. The tree is then
shifted so its bounding box starts at the origin and, when a target width is
configured, scaled uniformly to that width.
"""

from __future__ import annotations

import logging

from polydisplay.display.command import color_to_code
from polydisplay.display.display import DisplayKind
from polydisplay.engine.config import ColorMode
from polydisplay.engine.context import ConvertContext
from polydisplay.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


@transform(
    id="T3.03",
    layer=Layer.ASSEMBLE,
    dependencies=["T3.02"],
    description="Apply display type, appearance, placement and output width",
)
def style_root(ctx: ConvertContext) -> None:
    root = ctx.root
    if root is None:
        return
    cfg = ctx.config

    kind = cfg.effective_type
    root.set_type(kind)
    if kind == DisplayKind.BLOCK:
        root.set_block_type(cfg.block_type)
        root.set_depth(cfg.depth)
    elif cfg.color_mode == ColorMode.MONOCHROME:
        root.set_color(color_to_code(cfg.color))

    xmin, ymin, xmax, ymax = root.get_bounds()
    root.translate((-xmin, -ymin))

    width = xmax - xmin
    if cfg.width is not None and width > 0:
        root.scale(cfg.width / width)
    logger.debug("Styled %d displays as %s, source extent %.3g x %.3g", root.get_total_display_count(), kind, width, ymax - ymin)
