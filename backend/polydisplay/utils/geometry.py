"""Leaf-node ring helpers on Nx2 arrays. No engine imports."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray


def as_array(ring: Sequence[Sequence[float]] | NDArray[np.float64]) -> NDArray[np.float64]:
    """Ring of (x, y) pairs -> Nx2 float array (empty rings become shape (0, 2))."""
    arr = np.asarray(ring, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2))
    return arr.reshape(-1, 2)


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula over an open ring. Positive = CCW, Negative = CW (y-up)."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def drop_closing_point(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Strip the repeated first vertex that closed-ring producers append."""
    if len(points) > 1 and np.array_equal(points[0], points[-1]):
        return points[:-1]
    return points
