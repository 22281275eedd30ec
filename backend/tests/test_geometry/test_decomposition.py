"""Tests for convex decomposition."""

from __future__ import annotations

import pytest

from polydisplay.errors import DecompositionFailure
from polydisplay.geometry import decomposition
from polydisplay.geometry.decomposition import convex_decomposition, merge_pieces
from polydisplay.geometry.polygon import Polygon


def _check_pieces(pieces: list[Polygon], expected_area: float) -> None:
    assert sum(p.get_area() for p in pieces) == pytest.approx(expected_area, rel=1e-9)
    for p in pieces:
        assert p.is_convex()
        assert not p.has_hole()
        assert Polygon.is_counter_clockwise(p.points)


def test_convex_input_returned_unchanged(unit_square, hexagon):
    assert convex_decomposition(unit_square) == [unit_square]
    assert convex_decomposition(hexagon)[0] is hexagon


def test_triangle_returned_unchanged():
    tri = Polygon(((0, 0), (1, 0), (0, 1)))
    assert convex_decomposition(tri) == [tri]


def test_l_shape_two_pieces(l_shape):
    pieces = convex_decomposition(l_shape)
    assert len(pieces) == 2
    _check_pieces(pieces, 3.0)


def test_clockwise_l_shape(l_shape):
    pieces = convex_decomposition(l_shape.reverse())
    _check_pieces(pieces, 3.0)


def test_polygon_with_hole(frame):
    pieces = convex_decomposition(frame)
    assert len(pieces) >= 4
    _check_pieces(pieces, 12.0)


def test_pieces_keep_color_and_layer():
    poly = Polygon(((0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)), color="ff0000", layer=2)
    for piece in convex_decomposition(poly):
        assert (piece.color, piece.layer) == ("ff0000", 2)


def test_tessellator_error_becomes_decomposition_failure(monkeypatch, l_shape):
    def broken(rings):
        raise RuntimeError("bad contour")

    monkeypatch.setattr(decomposition, "triangulate", broken)
    with pytest.raises(DecompositionFailure) as exc:
        convex_decomposition(l_shape)
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_empty_tessellation_is_failure(monkeypatch, l_shape):
    monkeypatch.setattr(decomposition, "triangulate", lambda rings: [])
    with pytest.raises(DecompositionFailure):
        convex_decomposition(l_shape)


class TestMergePieces:
    def test_merge_across_shared_edge(self):
        a = Polygon(((0, 0), (1, 0), (1, 1)))
        b = Polygon(((0, 0), (1, 1), (0, 1)))
        merged = merge_pieces(a, b)
        assert merged is not None
        assert merged.points == ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))
        assert merged.is_convex()

    def test_single_shared_vertex(self):
        a = Polygon(((0, 0), (1, 0), (1, 1)))
        b = Polygon(((1, 1), (2, 1), (2, 2)))
        assert merge_pieces(a, b) is None

    def test_disjoint(self):
        a = Polygon(((0, 0), (1, 0), (1, 1)))
        b = Polygon(((5, 5), (6, 5), (6, 6)))
        assert merge_pieces(a, b) is None
