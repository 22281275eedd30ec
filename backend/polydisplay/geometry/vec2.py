"""2D vector arithmetic on plain ``(x, y)`` tuples. No state, no engine imports."""

from __future__ import annotations

import math

Vec2 = tuple[float, float]

# Absolute tolerance for equality, parallelism and colinearity tests.
EPSILON = 1e-8


def add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross(a: Vec2, b: Vec2) -> float:
    """Z component of the 3D cross product. Positive when b turns CCW from a."""
    return a[0] * b[1] - a[1] * b[0]


def length(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def normalize(a: Vec2) -> Vec2:
    n = math.hypot(a[0], a[1])
    if n == 0:
        return (0.0, 0.0)
    return (a[0] / n, a[1] / n)


def equal(a: Vec2, b: Vec2) -> bool:
    return abs(a[0] - b[0]) < EPSILON and abs(a[1] - b[1]) < EPSILON


def is_parallel(a: Vec2, b: Vec2) -> bool:
    return abs(cross(a, b)) < EPSILON
