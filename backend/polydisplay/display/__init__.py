"""Display primitives, convex-piece conversion and command encoding."""

from polydisplay.display.display import Display, DisplayKind
from polydisplay.display.conversion import Strategy, polygon_to_display, triangle_to_display
from polydisplay.display.covering import CoverResult, greedy_cover
from polydisplay.display.command import MAX_COMMAND_LENGTH, summon_command

__all__ = [
    "Display",
    "DisplayKind",
    "Strategy",
    "polygon_to_display",
    "triangle_to_display",
    "CoverResult",
    "greedy_cover",
    "MAX_COMMAND_LENGTH",
    "summon_command",
]
