"""Conversion configuration: strategy choice plus the global styling applied to the final tree."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from polydisplay.display.command import color_to_code
from polydisplay.display.conversion import Strategy
from polydisplay.display.display import DEFAULT_BLOCK_TYPE, DEFAULT_DEPTH, DisplayKind


class ColorMode(enum.StrEnum):
    MONOCHROME = "monochrome"
    MULTICOLOR = "multicolor"


@dataclass
class ConvertConfig:
    """Controls how polygons are turned into displays and how the result is styled."""

    # Converter strategy for each convex piece
    strategy: Strategy = Strategy.FAN

    # Output primitive: block_display or text_display
    display_type: DisplayKind = DisplayKind.BLOCK
    block_type: str = DEFAULT_BLOCK_TYPE
    # Fill of text displays in monochrome mode ("#rrggbb")
    color: str = "#000000"
    # multicolor forces text displays coloured per source polygon
    color_mode: ColorMode = ColorMode.MONOCHROME

    depth: float = DEFAULT_DEPTH
    # Fit the output to this width; None keeps source units
    width: float | None = None

    # Test candidate edges against the whole source polygon instead of the convex piece
    use_boundary: bool = True

    # Relative area tolerance of the greedy strategy
    cover_tolerance: float = 1e-6

    def __post_init__(self) -> None:
        self.strategy = Strategy(self.strategy)
        self.display_type = DisplayKind(self.display_type)
        self.color_mode = ColorMode(self.color_mode)
        color_to_code(self.color)
        if self.width is not None and self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")

    @property
    def effective_type(self) -> DisplayKind:
        if self.color_mode == ColorMode.MULTICOLOR:
            return DisplayKind.TEXT
        return self.display_type
