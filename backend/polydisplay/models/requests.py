"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from polydisplay.display.command import color_to_code
from polydisplay.display.conversion import Strategy
from polydisplay.display.display import DEFAULT_BLOCK_TYPE, DEFAULT_DEPTH, DisplayKind
from polydisplay.engine.config import ColorMode, ConvertConfig
from polydisplay.geometry.polygon import DEFAULT_COLOR, Polygon


class PolygonIn(BaseModel):
    points: list[tuple[float, float]] = Field(..., min_length=3, description="Outer ring, (x, y) pairs")
    holes: list[list[tuple[float, float]]] = Field(default_factory=list, description="Hole rings")
    color: str = Field(default=DEFAULT_COLOR, description="Fill as rrggbb hex")
    layer: int = Field(default=0, description="Ordering tag")

    def to_polygon(self) -> Polygon:
        return Polygon(tuple(self.points), tuple(tuple(h) for h in self.holes), self.color.lstrip("#"), self.layer)


class ConvertOptions(BaseModel):
    strategy: Strategy = Field(default=Strategy.FAN, description="fan (default) or greedy covering")
    display_type: DisplayKind = Field(default=DisplayKind.BLOCK, description="block_display or text_display")
    block_type: str = Field(default=DEFAULT_BLOCK_TYPE, description="Block id for block displays")
    color: str = Field(default="#000000", description="Text display background in monochrome mode")
    color_mode: ColorMode = Field(default=ColorMode.MONOCHROME, description="monochrome or multicolor")
    depth: float = Field(default=DEFAULT_DEPTH, gt=0, description="Extrusion thickness")
    width: float | None = Field(default=None, gt=0, description="Fit output to this width")
    use_boundary: bool = Field(default=True, description="Test edges against the whole source polygon")
    cover_tolerance: float = Field(default=1e-6, gt=0, description="Relative area tolerance (greedy)")
    sample_rate: float | None = Field(default=None, gt=0, description="SVG curve sampling, percent of length")

    @field_validator("color")
    @classmethod
    def _check_color(cls, v: str) -> str:
        color_to_code(v)
        return v

    def to_config(self) -> ConvertConfig:
        return ConvertConfig(
            strategy=self.strategy,
            display_type=self.display_type,
            block_type=self.block_type,
            color=self.color,
            color_mode=self.color_mode,
            depth=self.depth,
            width=self.width,
            use_boundary=self.use_boundary,
            cover_tolerance=self.cover_tolerance,
        )


class ConvertRequest(BaseModel):
    polygons: list[PolygonIn] | None = Field(default=None, description="Flattened polygons")
    svg: str | None = Field(default=None, description="Raw SVG code (alternative to polygons)")
    options: ConvertOptions = Field(default_factory=ConvertOptions)

    @model_validator(mode="after")
    def _one_source(self) -> ConvertRequest:
        if (self.polygons is None) == (self.svg is None):
            raise ValueError("Provide exactly one of 'polygons' or 'svg'")
        return self
