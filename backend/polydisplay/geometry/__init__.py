"""Polygon model, predicates and convex decomposition."""

from polydisplay.geometry.vec2 import EPSILON, Vec2
from polydisplay.geometry.polygon import Polygon
from polydisplay.geometry.decomposition import convex_decomposition

__all__ = [
    "EPSILON",
    "Vec2",
    "Polygon",
    "convex_decomposition",
]
