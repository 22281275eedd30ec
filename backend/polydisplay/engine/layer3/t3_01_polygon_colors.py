"""T3.01: Per-Polygon Colour (multicolor mode only)."""

from __future__ import annotations

from polydisplay.display.command import color_to_code
from polydisplay.engine.context import ConvertContext
from polydisplay.engine.registry import Layer, transform


@transform(
    id="T3.01",
    layer=Layer.ASSEMBLE,
    dependencies=["T2.01"],
    tags={"multicolor"},
    description="Colour every polygon's displays with its own fill",
)
def color_polygons(ctx: ConvertContext) -> None:
    for pd in ctx.active_polygons():
        if pd.display is None:
            continue
        try:
            code = color_to_code(pd.source.color)
        except ValueError as e:
            ctx.warnings.append(f"{pd.id}: {e}; keeping default colour")
            continue
        pd.display.set_color(code)
