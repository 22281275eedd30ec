"""Typed errors raised by the geometry core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from polydisplay.display.covering import CoverResult


class PolyDisplayError(Exception):
    """Base error of the project."""


class InvalidGeometry(PolyDisplayError, ValueError):
    """Polygon unusable by a convexity-assuming operation (too few points, not convex)."""


class DecompositionFailure(PolyDisplayError):
    """The tessellator rejected a polygon, or produced nothing usable."""


class UnreachableCover(PolyDisplayError):
    """Greedy covering ran out of candidates before covering the whole polygon.

    Soft failure: ``result`` holds the partial cover and is still renderable.
    """

    def __init__(self, message: str, result: CoverResult) -> None:
        super().__init__(message)
        self.result = result
