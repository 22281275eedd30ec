"""Display tree: one parallelogram primitive per node, passengers nested beneath.

Only the root's ``position`` is meaningful. Every passenger shares its
parent's position and carries its offset in ``translation``, so a node's
rendered location is always ``position + translation``.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from polydisplay.geometry import vec2
from polydisplay.geometry.vec2 import Vec2
from polydisplay.utils.geometry import bbox


class DisplayKind(enum.StrEnum):
    BLOCK = "block_display"
    TEXT = "text_display"


DEFAULT_BLOCK_TYPE = "black_concrete"
DEFAULT_COLOR_CODE = -16777216  # opaque black, signed ARGB
DEFAULT_DEPTH = 0.0625

# Text displays render a single escaped-space glyph; the background is the fill.
TEXT_PLACEHOLDER = "\\s"
# Glyph cell size and anchor offset of that placeholder, in side-vector units
_TEXT_SCALE_X = 8.0
_TEXT_SCALE_Y = 4.0
_TEXT_OFFSET = 0.4


def _rebase(node: Display, delta: Vec2, position: Vec2) -> None:
    for d in node.walk():
        d.translation = vec2.add(d.translation, delta)
        d.position = position


@dataclass
class Display:
    position: Vec2
    sides: tuple[Vec2, Vec2]
    kind: DisplayKind = DisplayKind.BLOCK
    translation: Vec2 = (0.0, 0.0)
    depth: float = DEFAULT_DEPTH
    block_state: dict[str, str] = field(default_factory=lambda: {"Name": DEFAULT_BLOCK_TYPE})
    color_code: int = DEFAULT_COLOR_CODE
    passengers: list[Display] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.position = (float(self.position[0]), float(self.position[1]))
        s0, s1 = self.sides
        self.sides = ((float(s0[0]), float(s0[1])), (float(s1[0]), float(s1[1])))
        self.translation = (float(self.translation[0]), float(self.translation[1]))
        self.kind = DisplayKind(self.kind)

    # ---- Tree construction ----

    @staticmethod
    def nested_display(displays: Sequence[Display]) -> Display:
        """Fold a flat list into one tree rooted at its first element.

        The root's placement moves entirely into its translation (position
        becomes the origin); every other display is attached in order with
        its rendered location unchanged.
        """
        if not displays:
            raise ValueError("nested_display needs at least one display")
        base, *rest = displays
        _rebase(base, base.position, (0.0, 0.0))

        attached = []
        for d in rest:
            _rebase(d, vec2.sub(d.position, base.position), base.position)
            attached.append(d)
        base.passengers = base.passengers + attached
        return base

    def add_passenger(self, display: Display) -> None:
        _rebase(display, vec2.sub(display.position, self.position), self.position)
        self.passengers.append(display)

    def walk(self) -> Iterator[Display]:
        """Pre-order traversal, self first."""
        yield self
        for p in self.passengers:
            yield from p.walk()

    def clone(self) -> Display:
        return Display(
            position=self.position,
            sides=self.sides,
            kind=self.kind,
            translation=self.translation,
            depth=self.depth,
            block_state=dict(self.block_state),
            color_code=self.color_code,
            passengers=[p.clone() for p in self.passengers],
        )

    # ---- Cascading edits ----

    def move(self, position: Vec2) -> None:
        """Place the tree; translations are untouched."""
        position = (float(position[0]), float(position[1]))
        for d in self.walk():
            d.position = position

    def translate(self, offset: Vec2) -> None:
        """Shift every rendered primitive; only translations reach the serialized record."""
        for d in self.walk():
            d.translation = vec2.add(d.translation, offset)

    def scale(self, factor: float) -> None:
        s0, s1 = self.sides
        self.sides = (vec2.scale(s0, factor), vec2.scale(s1, factor))
        self.translation = vec2.scale(self.translation, factor)
        for p in self.passengers:
            p.scale(factor)

    def set_depth(self, depth: float) -> None:
        self.depth = float(depth)
        for p in self.passengers:
            p.set_depth(depth)

    def set_type(self, kind: DisplayKind | str) -> None:
        kind = DisplayKind(kind)
        self.kind = kind
        for p in self.passengers:
            p.set_type(kind)

    def set_block_type(self, block_type: str) -> None:
        self.block_state = {"Name": block_type}
        for p in self.passengers:
            p.set_block_type(block_type)

    def set_color(self, color_code: int) -> None:
        self.color_code = int(color_code)
        for p in self.passengers:
            p.set_color(color_code)

    # ---- Derived geometry ----

    def get_absolute_position(self) -> Vec2:
        return vec2.add(self.position, self.translation)

    def get_transformation(self) -> NDArray[np.float64]:
        """4x4 affine transform in the renderer's y-down frame."""
        (s0x, s0y), (s1x, s1y) = self.sides
        tx, ty = self.translation
        if self.kind == DisplayKind.TEXT:
            return np.array(
                [
                    [s1x * _TEXT_SCALE_X, s0x * _TEXT_SCALE_Y, 0.0, tx + _TEXT_OFFSET * s1x],
                    [-s1y * _TEXT_SCALE_X, -s0y * _TEXT_SCALE_Y, 0.0, -(ty + _TEXT_OFFSET * s1y)],
                    [0.0, 0.0, self.depth, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ],
                dtype=np.float64,
            )
        return np.array(
            [
                [s0x, s1x, 0.0, tx],
                [-s0y, -s1y, 0.0, -ty],
                [0.0, 0.0, -self.depth, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ],
            dtype=np.float64,
        )

    def get_vertices(self) -> list[Vec2]:
        """The four corners, always wound counterclockwise (y-up)."""
        origin = self.get_absolute_position()
        s0, s1 = self.sides
        if vec2.cross(s0, s1) < 0:
            s0, s1 = s1, s0
        return [
            origin,
            vec2.add(origin, s0),
            vec2.add(vec2.add(origin, s0), s1),
            vec2.add(origin, s1),
        ]

    def get_bounds(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax) over every vertex in the tree."""
        pts = np.array([v for d in self.walk() for v in d.get_vertices()], dtype=np.float64)
        return bbox(pts)

    def get_total_display_count(self) -> int:
        return 1 + sum(p.get_total_display_count() for p in self.passengers)

    # ---- Output ----

    def serialize(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": str(self.kind),
            "transformation": [float(v) for v in self.get_transformation().ravel()],
        }
        if self.kind == DisplayKind.BLOCK:
            record["block_state"] = dict(self.block_state)
        else:
            record["background"] = self.color_code
            record["text"] = TEXT_PLACEHOLDER
        if self.passengers:
            record["Passengers"] = [p.serialize() for p in self.passengers]
        return record

    def command(self, pos: Sequence[str] = ("~", "~", "~")) -> str:
        from polydisplay.display.command import summon_command

        return summon_command(self, pos)
