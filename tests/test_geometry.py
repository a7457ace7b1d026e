"""
Tests for the integer geometry kernel.

Tests cover:
- Bbox algebra (union, intersection, empty sentinel)
- Rect normalization, expansion and corner queries
- Grid snapping
- Shape bounding boxes
"""

import pytest

from tessera.errors import EmptyGeometry
from tessera.geometry import (
    Bbox, Corner, Dims, Dir, Element, ExpandMode, Layer, Path, Point, Polygon,
    Rect, Side, ShapeKind, snap_to_grid,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def boxes():
    """A handful of boxes, including the empty one."""
    return [
        Bbox.new(Point(0, 0), Point(10, 5)),
        Bbox.new(Point(3, -2), Point(20, 4)),
        Bbox.new(Point(-7, 8), Point(-1, 12)),
        Bbox.from_point(Point(4, 4)),
        Bbox.empty(),
    ]


# =============================================================================
# Bbox algebra
# =============================================================================

class TestBboxAlgebra:
    """Union and intersection laws."""

    def test_union_commutative(self, boxes):
        for a in boxes:
            for b in boxes:
                assert a.union(b) == b.union(a)

    def test_intersection_commutative(self, boxes):
        for a in boxes:
            for b in boxes:
                assert a.intersection(b) == b.intersection(a)

    def test_union_with_empty_is_identity(self, boxes):
        for a in boxes:
            assert a.union(Bbox.empty()) == a

    def test_intersection_with_empty_is_empty(self, boxes):
        for a in boxes:
            assert a.intersection(Bbox.empty()).is_empty()

    def test_union_idempotent(self, boxes):
        for a in boxes:
            assert a.union(a) == a

    def test_disjoint_intersection_is_canonical_empty(self):
        a = Bbox.new(Point(0, 0), Point(1, 1))
        b = Bbox.new(Point(5, 5), Point(6, 6))
        assert a.intersection(b) == Bbox.empty()

    def test_round_trip_through_rect(self, boxes):
        for b in boxes:
            if not b.is_empty():
                assert Bbox.from_rect(b.into_rect()) == b

    def test_empty_into_rect_fails(self):
        with pytest.raises(EmptyGeometry):
            Bbox.empty().into_rect()

    def test_empty_queries_fail(self):
        with pytest.raises(EmptyGeometry):
            Bbox.empty().width()
        with pytest.raises(EmptyGeometry):
            Bbox.empty().center()

    def test_expand_empty_stays_empty(self):
        assert Bbox.empty().expand(10).is_empty()

    def test_inverted_corners_are_the_empty_sentinel(self):
        inverted = Bbox(Point(5, 5), Point(0, 0))
        assert inverted == Bbox.empty()
        assert Bbox(Point(0, 5), Point(10, 0)) == Bbox.empty()
        box = Bbox.new(Point(10, 10), Point(20, 20))
        assert box.union(inverted) == box
        assert inverted.union(box) == box

    def test_new_normalizes(self):
        b = Bbox.new(Point(10, 0), Point(0, 10))
        assert b.p0 == Point(0, 0)
        assert b.p1 == Point(10, 10)

    def test_contains(self):
        b = Bbox.new(Point(0, 0), Point(10, 10))
        assert b.contains(Point(10, 0))
        assert not b.contains(Point(11, 0))
        assert not Bbox.empty().contains(Point(0, 0))


# =============================================================================
# Rect
# =============================================================================

class TestRect:
    """Rectangle construction and queries."""

    def test_normalizes_corners(self):
        r = Rect(Point(10, 10), Point(0, -5))
        assert r.p0 == Point(0, -5)
        assert r.p1 == Point(10, 10)

    def test_dims(self):
        r = Rect.from_xy(0, 0, 10, 4)
        assert r.width() == 10
        assert r.height() == 4
        assert r.area() == 40
        assert r.dims() == Dims(10, 4)
        assert r.center() == Point(5, 2)

    def test_longer_dir(self):
        assert Rect.from_xy(0, 0, 10, 4).longer_dir() is Dir.HORIZ
        assert Rect.from_xy(0, 0, 4, 10).longer_dir() is Dir.VERT
        assert Rect.from_xy(0, 0, 4, 4).longer_dir() is Dir.VERT
        assert Rect.from_xy(0, 0, 10, 4).shorter_dir() is Dir.VERT

    def test_expand_and_shrink(self):
        r = Rect.from_xy(0, 0, 10, 4)
        assert r.expand(2) == Rect.from_xy(-2, -2, 12, 6)
        assert r.shrink(2) == Rect.from_xy(2, 2, 8, 2)

    def test_over_contraction_fails(self):
        with pytest.raises(EmptyGeometry):
            Rect.from_xy(0, 0, 10, 4).expand(-3)

    def test_expand_dir_and_side(self):
        r = Rect.from_xy(0, 0, 10, 10)
        assert r.expand_dir(Dir.HORIZ, 3) == Rect.from_xy(-3, 0, 13, 10)
        assert r.expand_side(Side.TOP, 5) == Rect.from_xy(0, 0, 10, 15)
        assert r.expand_side(Side.LEFT, 5) == Rect.from_xy(-5, 0, 10, 10)

    @pytest.mark.parametrize("mode,expected", [
        (ExpandMode.ALL, (-2, -3, 12, 13)),
        (ExpandMode.LOWER_LEFT, (-2, -3, 10, 10)),
        (ExpandMode.LOWER_RIGHT, (0, -3, 12, 10)),
        (ExpandMode.UPPER_LEFT, (-2, 0, 10, 13)),
        (ExpandMode.UPPER_RIGHT, (0, 0, 12, 13)),
    ])
    def test_expand_dims(self, mode, expected):
        r = Rect.from_xy(0, 0, 10, 10)
        assert r.expand_dims(Dims(2, 3), mode) == Rect.from_xy(*expected)

    def test_corners_and_sides(self):
        r = Rect.from_xy(1, 2, 11, 22)
        assert r.corner(Corner.LOWER_RIGHT) == Point(11, 2)
        assert r.corner(Corner.UPPER_LEFT) == Point(1, 22)
        assert r.side(Side.BOT) == 2
        assert r.side(Side.RIGHT) == 11

    def test_translate_returns_new_rect(self):
        r = Rect.from_xy(0, 0, 1, 1)
        moved = r.translate(Point(5, 5))
        assert moved == Rect.from_xy(5, 5, 6, 6)
        assert r == Rect.from_xy(0, 0, 1, 1)

    def test_intersection_is_bbox(self):
        a = Rect.from_xy(0, 0, 10, 10)
        b = Rect.from_xy(5, 5, 20, 20)
        assert a.intersection(b) == Bbox.new(Point(5, 5), Point(10, 10))
        assert a.union(b) == Bbox.new(Point(0, 0), Point(20, 20))

    def test_grid(self):
        assert Rect.from_xy(0, 0, 10, 15).is_on_grid(5)
        assert not Rect.from_xy(0, 0, 10, 12).is_on_grid(5)
        assert Rect.from_xy(1, 0, 10, 12).snap_to_grid(5) == Rect.from_xy(0, 0, 10, 10)


# =============================================================================
# Grid snapping
# =============================================================================

class TestSnapToGrid:

    @pytest.mark.parametrize("pos,grid,expected", [
        (7, 5, 5),
        (8, 5, 10),
        (10, 5, 10),
        (-3, 5, -5),
        (-2, 5, 0),
        (5, 10, 0),
        (15, 10, 10),
    ])
    def test_rounds_to_nearest(self, pos, grid, expected):
        assert snap_to_grid(pos, grid) == expected

    def test_non_positive_grid_fails(self):
        with pytest.raises(ValueError):
            snap_to_grid(3, 0)

    def test_point_snap(self):
        assert Point(7, 8).snap_to_grid(5) == Point(5, 10)


# =============================================================================
# Shapes
# =============================================================================

class TestShapes:

    def test_polygon_bbox(self):
        poly = Polygon([Point(0, 0), Point(10, 5), Point(-3, 2)])
        assert poly.bbox() == Bbox.new(Point(-3, 0), Point(10, 5))

    def test_path_bbox(self):
        path = Path([Point(0, 0), Point(0, 10), Point(7, 10)], width=2)
        assert path.bbox() == Bbox.new(Point(0, 0), Point(7, 10))

    def test_empty_polygon_has_empty_bbox(self):
        assert Polygon([]).bbox().is_empty()

    def test_element_kinds(self):
        layer = Layer('met1')
        assert Element(layer, Rect.from_xy(0, 0, 1, 1)).kind is ShapeKind.RECT
        assert Element(layer, Polygon([Point(0, 0)])).kind is ShapeKind.POLYGON
        assert Element(layer, Path([Point(0, 0)], 1)).kind is ShapeKind.PATH
        assert Element(layer, Point(1, 1)).kind is ShapeKind.POINT

    def test_element_geometry(self):
        e = Element(Layer('met1'), Rect.from_xy(0, 0, 10, 4))
        assert e.geometry.area == 40
        assert e.bounds == (0, 0, 10, 4)

    def test_path_geometry_has_width(self):
        e = Element(Layer('met1'), Path([Point(0, 0), Point(10, 0)], width=2))
        assert e.geometry.area == pytest.approx(20)

    def test_element_translate_in_place(self):
        e = Element(Layer('met1'), Rect.from_xy(0, 0, 10, 4))
        e.translate(Point(1, 1))
        assert e.shape == Rect.from_xy(1, 1, 11, 5)

    def test_layer_equality_ignores_connectivity(self):
        assert Layer('met1', connectivity=True) == Layer('met1')
        assert Layer('met1') != Layer('met1', 'pin')
        assert len({Layer('met1'), Layer('met1', connectivity=True)}) == 1
