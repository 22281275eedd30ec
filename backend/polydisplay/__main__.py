"""Command line: python -m polydisplay shape.svg [-o out.json]

Prints the summon command, or with ``-o`` writes the serialized display
record, command and per-polygon errors as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from pydantic import ValidationError

from polydisplay.config import settings
from polydisplay.display.conversion import Strategy
from polydisplay.display.display import DEFAULT_BLOCK_TYPE, DEFAULT_DEPTH, DisplayKind
from polydisplay.engine.config import ColorMode, ConvertConfig
from polydisplay.engine.pipeline import convert_polygons
from polydisplay.geometry.polygon import Polygon
from polydisplay.models.requests import PolygonIn
from polydisplay.svg.parser import parse_svg

logger = logging.getLogger("polydisplay")


def load_polygons(path: str, sample_rate: float) -> list[Polygon]:
    """Polygons from an .svg file, or a .json list of {points, holes, color, layer}."""
    with open(path, encoding="utf-8") as f:
        text = f.read()
    if path.lower().endswith(".svg"):
        return parse_svg(text, sample_rate)

    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("polygons", [])
    return [PolygonIn.model_validate(item).to_polygon() for item in data]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polydisplay",
        description="Convert filled SVG shapes or polygon JSON into nested display entities",
    )
    parser.add_argument("input", help=".svg file or .json polygon list")
    parser.add_argument("-o", "--output", help="Write the display record and command as JSON here")
    parser.add_argument("--sample-rate", type=float, default=settings.default_sample_rate,
                        help="Curve sampling step, percent of subpath length")
    parser.add_argument("--strategy", choices=[s.value for s in Strategy], default=Strategy.FAN.value)
    parser.add_argument("--type", dest="display_type", choices=[k.value for k in DisplayKind],
                        default=DisplayKind.BLOCK.value)
    parser.add_argument("--block", default=DEFAULT_BLOCK_TYPE, help="Block id for block displays")
    parser.add_argument("--color", default="#000000", help="Text display colour (monochrome)")
    parser.add_argument("--color-mode", choices=[m.value for m in ColorMode], default=ColorMode.MONOCHROME.value)
    parser.add_argument("--depth", type=float, default=DEFAULT_DEPTH)
    parser.add_argument("--width", type=float, default=None, help="Fit output to this width")
    parser.add_argument("--log-level", default=settings.polydisplay_log_level)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if not os.path.isfile(args.input):
        print(f"File not found: {args.input}", file=sys.stderr)
        return 1

    try:
        config = ConvertConfig(
            strategy=args.strategy,
            display_type=args.display_type,
            block_type=args.block,
            color=args.color,
            color_mode=args.color_mode,
            depth=args.depth,
            width=args.width,
        )
        polygons = load_polygons(args.input, args.sample_rate)
    except (ValueError, ValidationError) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    ctx = convert_polygons(polygons, config)
    for key, message in ctx.errors.items():
        logger.warning("%s: %s", key, message)

    if ctx.root is None:
        print("No displays produced.", file=sys.stderr)
        return 1

    command = ctx.root.command()
    if len(command) > settings.max_command_length:
        logger.warning("Command is %d chars, over the %d limit", len(command), settings.max_command_length)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(
                {
                    "display": ctx.root.serialize(),
                    "command": command,
                    "display_count": ctx.display_count,
                    "errors": ctx.errors,
                    "warnings": ctx.warnings,
                },
                f,
                indent=2,
            )
        print(f"{ctx.display_count} displays -> {args.output}")
    else:
        print(command)
    return 0


if __name__ == "__main__":
    sys.exit(main())
