"""Summon-command encoding of serialized display records.

The record produced by ``Display.serialize()`` is written as an SNBT-style
literal: keys bare, strings double-quoted, no spaces after separators.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from polydisplay.display.display import Display

MAX_COMMAND_LENGTH = 32767


def format_number(num: float, length: int = 12) -> str:
    """Fixed-point text with trailing zeros dropped: 1.0 -> "1", 0.25 -> "0.25"."""
    n = float(num)
    if not math.isfinite(n):
        return str(num)
    text = f"{n:.{length}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def stringify_literal(obj: Any) -> str:
    if obj is None:
        return "null"
    if isinstance(obj, bool):
        return "true" if obj else "false"
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, float):
        return format_number(obj)
    if isinstance(obj, str):
        return f'"{obj}"'
    if isinstance(obj, dict):
        return "{" + ", ".join(f"{k}: {stringify_literal(v)}" for k, v in obj.items()) + "}"
    if isinstance(obj, (list, tuple)):
        return "[" + ", ".join(stringify_literal(v) for v in obj) + "]"
    return str(obj)


def summon_command(display: Display, pos: Sequence[str] = ("~", "~", "~")) -> str:
    literal = stringify_literal(display.serialize())
    command = " ".join(["summon", str(display.kind), " ".join(pos), literal])
    return command.replace(", ", ",").replace(": ", ":")


def hex_to_signed_dword(hex_string: str) -> int:
    """ "ff000000" -> -16777216 (two's complement of the unsigned 32-bit value)."""
    unsigned = int(hex_string, 16)
    return unsigned - 0x100000000 if unsigned >= 0x80000000 else unsigned


def color_to_code(color: str) -> int:
    """Opaque ARGB colour code for "#rrggbb", "rrggbb" or "#rgb"."""
    hex_part = color.strip().lstrip("#")
    if len(hex_part) == 3:
        hex_part = "".join(c * 2 for c in hex_part)
    if len(hex_part) != 6:
        raise ValueError(f"Expected an rrggbb colour, got {color!r}")
    return hex_to_signed_dword("ff" + hex_part)
