"""SVG flattening: filled shapes to point-list Polygons.

Facade over svgpathtools (path geometry, transform parsing) and regex tag
scanning. Each filled element becomes one or more Polygons: its rings are
sampled, mapped through the element's and its ancestors' ``transform``,
xor-merged so nested rings turn into holes, and stripped of colinear
vertices. ``fill`` (attribute or inline style) is inherited from enclosing
``<svg>``/``<g>`` tags. The element's document index is the polygon
``layer``. CSS stylesheets are not applied.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from svgpathtools import Line, Path, parse_path
from svgpathtools.parser import parse_transform

from polydisplay.geometry.clipping import xor_rings
from polydisplay.geometry.polygon import DEFAULT_COLOR, Polygon
from polydisplay.geometry.vec2 import Vec2

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<(/?)([A-Za-z][\w:.-]*)([^>]*?)(/?)>")
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_ATTR_RE = re.compile(r'([\w:-]+)\s*=\s*(?:"([^"]*)"|\'([^\']*)\')')
_STYLE_FILL_RE = re.compile(r"(?:^|;)\s*fill\s*:\s*([^;]+)", re.IGNORECASE)
_NUMBER_RE = re.compile(r"[-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?")
_RGB_RE = re.compile(r"rgb\(\s*([\d.]+)%?\s*,\s*([\d.]+)%?\s*,\s*([\d.]+)%?\s*\)", re.IGNORECASE)
_HEX_RE = re.compile(r"#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

_SHAPE_TAGS = {"path", "polygon", "rect", "circle", "ellipse"}
# Children of these are definitions, never drawn in place
_NON_RENDERED_TAGS = {"defs", "clippath", "mask", "symbol", "pattern", "marker"}

_NAMED_COLORS = {
    "black": "000000",
    "white": "ffffff",
    "red": "ff0000",
    "green": "008000",
    "blue": "0000ff",
    "yellow": "ffff00",
    "gray": "808080",
    "grey": "808080",
}


@dataclass(frozen=True)
class _Scope:
    """Inherited presentation state at one point of the element tree."""

    fill: str | None
    matrix: NDArray[np.float64]
    hidden: bool = False


def parse_svg(svg_text: str, sample_rate: float = 2.0) -> list[Polygon]:
    """Flatten every filled shape element of ``svg_text`` into Polygons.

    ``sample_rate`` is the curve sampling step as a percentage of each
    subpath's length (2.0 -> a point every 2% along curved segments).
    Straight segments keep their exact vertices. Elements that fail to
    parse are logged and skipped.
    """
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")

    stack = [_Scope(fill=None, matrix=np.identity(3))]
    polygons: list[Polygon] = []
    n_elements = 0
    for match in _TAG_RE.finditer(_COMMENT_RE.sub("", svg_text)):
        closing, tag, attr_text, self_closing = match.groups()
        if closing:
            if len(stack) > 1:
                stack.pop()
            continue

        tag = tag.lower()
        attrs = _extract_attrs(attr_text)
        scope = _child_scope(stack[-1], tag, attrs)
        if not self_closing:
            stack.append(scope)
        if tag not in _SHAPE_TAGS:
            continue

        layer = n_elements
        n_elements += 1
        if scope.hidden:
            continue
        fill = _resolve_fill(scope.fill)
        if fill is None:
            continue

        try:
            rings = [_apply_matrix(scope.matrix, r) for r in _element_rings(tag, attrs, sample_rate)]
        except Exception as e:
            logger.warning("Failed to flatten <%s> #%d: %s", tag, layer, e)
            continue

        for poly in xor_rings(rings, fill, layer):
            poly = poly.simplify()
            if len(poly.points) >= 3:
                polygons.append(poly)

    logger.info("Parsed SVG: %d shape elements -> %d polygons", n_elements, len(polygons))
    return polygons


def _child_scope(parent: _Scope, tag: str, attrs: dict[str, str]) -> _Scope:
    own = _own_fill(attrs)
    matrix = parent.matrix
    transform = attrs.get("transform", "").strip()
    if transform:
        try:
            matrix = matrix @ parse_transform(transform)
        except Exception as e:
            logger.warning("Ignoring bad transform %r on <%s>: %s", transform, tag, e)
    return _Scope(
        fill=own if own is not None else parent.fill,
        matrix=matrix,
        hidden=parent.hidden or tag in _NON_RENDERED_TAGS,
    )


def _apply_matrix(matrix: NDArray[np.float64], ring: list[Vec2]) -> list[Vec2]:
    if not ring or np.allclose(matrix, np.identity(3)):
        return ring
    pts = np.asarray(ring, dtype=np.float64)
    mapped = pts @ matrix[:2, :2].T + matrix[:2, 2]
    return [(float(x), float(y)) for x, y in mapped]

def _element_rings(tag: str, attrs: dict[str, str], sample_rate: float) -> list[list[Vec2]]:
    if tag == "path":
        d = attrs.get("d", "")
        if not d.strip():
            return []
        path = parse_path(" ".join(d.split()))
        return [_sample_subpath(sp, sample_rate) for sp in _split_subpaths(path)]
    if tag == "polygon":
        nums = [float(n) for n in _NUMBER_RE.findall(attrs.get("points", ""))]
        return [list(zip(nums[0::2], nums[1::2]))]
    if tag == "rect":
        x, y = _num(attrs, "x"), _num(attrs, "y")
        w, h = _num(attrs, "width"), _num(attrs, "height")
        if w <= 0 or h <= 0:
            return []
        return [[(x, y), (x + w, y), (x + w, y + h), (x, y + h)]]
    if tag == "circle":
        r = _num(attrs, "r")
        return [_ellipse_points(_num(attrs, "cx"), _num(attrs, "cy"), r, r, sample_rate)]
    if tag == "ellipse":
        return [_ellipse_points(_num(attrs, "cx"), _num(attrs, "cy"), _num(attrs, "rx"), _num(attrs, "ry"), sample_rate)]
    return []


def _extract_attrs(tag_text: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(tag_text):
        attrs[m.group(1)] = m.group(2) if m.group(2) is not None else m.group(3)
    return attrs


def _num(attrs: dict[str, str], key: str, default: float = 0.0) -> float:
    """Numeric attribute with any unit suffix ignored ("12px" -> 12.0)."""
    m = _NUMBER_RE.search(attrs.get(key, ""))
    return float(m.group(0)) if m else default


def _own_fill(attrs: dict[str, str]) -> str | None:
    """Fill declared on this element (inline style wins), None when it inherits."""
    raw = attrs.get("fill")
    style_match = _STYLE_FILL_RE.search(attrs.get("style", ""))
    if style_match:
        raw = style_match.group(1)
    if raw is None:
        return None
    raw = raw.strip().lower()
    return None if raw == "inherit" else raw


def _resolve_fill(raw: str | None) -> str | None:
    """Computed fill as lowercase "rrggbb", or None for unfilled elements."""
    if raw is None:
        return DEFAULT_COLOR
    if raw in ("none", "transparent"):
        return None
    if raw in _NAMED_COLORS:
        return _NAMED_COLORS[raw]
    m = _HEX_RE.match(raw)
    if m:
        hex_part = m.group(1)
        if len(hex_part) == 3:
            hex_part = "".join(c * 2 for c in hex_part)
        return hex_part
    m = _RGB_RE.match(raw)
    if m:
        channels = [min(255, max(0, round(float(v)))) for v in m.groups()]
        return "".join(f"{c:02x}" for c in channels)

    logger.warning("Unsupported fill %r, using black", raw)
    return DEFAULT_COLOR


def _split_subpaths(path: Path) -> list[Path]:
    """Split a compound path at moveto discontinuities."""
    subpaths = []
    current: list = []
    for seg in path:
        if current and abs(seg.start - current[-1].end) > 1e-6:
            subpaths.append(Path(*current))
            current = []
        current.append(seg)
    if current:
        subpaths.append(Path(*current))
    return subpaths


def _sample_subpath(path: Path, sample_rate: float) -> list[Vec2]:
    """Vertices of straight segments plus evenly spaced samples on curves."""
    total = path.length()
    if total < 1e-10:
        return []
    step = total * sample_rate / 100.0

    points: list[Vec2] = []
    for seg in path:
        if isinstance(seg, Line):
            ts = [0.0]
        else:
            n = max(1, math.ceil(seg.length() / step))
            ts = np.linspace(0.0, 1.0, n, endpoint=False)
        for t in ts:
            pt = seg.point(t)
            points.append((float(pt.real), float(pt.imag)))
    return points


def _ellipse_points(cx: float, cy: float, rx: float, ry: float, sample_rate: float) -> list[Vec2]:
    if rx <= 0 or ry <= 0:
        return []
    n = max(8, math.ceil(100.0 / sample_rate))
    angles = np.linspace(0.0, 2 * np.pi, n, endpoint=False)
    return [(float(cx + rx * np.cos(a)), float(cy + ry * np.sin(a))) for a in angles]
