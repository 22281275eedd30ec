"""Tests for 2D vector helpers."""

import math

from polydisplay.geometry import vec2


def test_arithmetic():
    assert vec2.add((1.0, 2.0), (3.0, 4.0)) == (4.0, 6.0)
    assert vec2.sub((1.0, 2.0), (3.0, 4.0)) == (-2.0, -2.0)
    assert vec2.scale((1.0, -2.0), 3.0) == (3.0, -6.0)
    assert vec2.dot((1.0, 2.0), (3.0, 4.0)) == 11.0


def test_cross_sign_follows_rotation():
    assert vec2.cross((1.0, 0.0), (0.0, 1.0)) == 1.0
    assert vec2.cross((0.0, 1.0), (1.0, 0.0)) == -1.0


def test_length_and_normalize():
    assert vec2.length((3.0, 4.0)) == 5.0
    nx, ny = vec2.normalize((3.0, 4.0))
    assert math.isclose(nx, 0.6) and math.isclose(ny, 0.8)


def test_normalize_zero_vector():
    assert vec2.normalize((0.0, 0.0)) == (0.0, 0.0)


def test_equal_within_epsilon():
    assert vec2.equal((0.0, 0.0), (1e-9, -1e-9))
    assert not vec2.equal((0.0, 0.0), (1e-7, 0.0))


def test_is_parallel():
    assert vec2.is_parallel((1.0, 1.0), (2.0, 2.0))
    assert vec2.is_parallel((1.0, 1.0), (-3.0, -3.0))
    assert not vec2.is_parallel((1.0, 0.0), (0.0, 1.0))


def test_non_finite_values_propagate():
    assert vec2.add((math.inf, 0.0), (1.0, 0.0))[0] == math.inf
    assert math.isnan(vec2.length((math.nan, 0.0)))
