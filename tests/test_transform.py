"""
Tests for exact integer transformations.
"""

import pytest

from tessera.geometry import Named, Orientation, Point, Rect, Transformation


class TestOrientation:

    def test_invalid_angle(self):
        with pytest.raises(ValueError):
            Orientation(False, 45)

    @pytest.mark.parametrize("name", list(Named))
    def test_orientation_round_trip(self, name):
        orientation = Orientation.named(name)
        trans = Transformation.with_loc_and_orientation(Point(5, -5), orientation)
        assert trans.orientation() == orientation
        assert trans.offset_point() == Point(5, -5)

    def test_eight_distinct_matrices(self):
        assert len({Orientation.named(n).matrix() for n in Named}) == 8


class TestTransformation:

    @pytest.mark.parametrize("name,expected", [
        (Named.R0, Point(3, 4)),
        (Named.R90, Point(-4, 3)),
        (Named.R180, Point(-3, -4)),
        (Named.R270, Point(4, -3)),
        (Named.REFLECT_VERT, Point(3, -4)),
        (Named.REFLECT_HORIZ, Point(-3, 4)),
        (Named.R90_REFLECT_VERT, Point(4, 3)),
        (Named.R270_REFLECT_VERT, Point(-4, -3)),
    ])
    def test_apply(self, name, expected):
        trans = Transformation.with_loc_and_orientation(Point(0, 0), Orientation.named(name))
        assert trans.apply(Point(3, 4)) == expected

    def test_translation_after_rotation(self):
        trans = Transformation.with_loc_and_orientation(
            Point(10, 0), Orientation.named(Named.R90))
        assert trans.apply(Point(1, 0)) == Point(10, 1)

    def test_cascade(self):
        parent = Transformation.translate(10, 0)
        child = Transformation.with_loc_and_orientation(Point(0, 0), Orientation.named(Named.R90))
        assert Transformation.cascade(parent, child).apply(Point(1, 0)) == Point(10, 1)

    def test_four_quarter_turns_are_identity(self):
        r90 = Transformation.with_loc_and_orientation(Point(0, 0), Orientation.named(Named.R90))
        total = Transformation.identity()
        for _ in range(4):
            total = Transformation.cascade(r90, total)
        assert total == Transformation.identity()

    def test_rect_transform_normalizes(self):
        trans = Transformation.with_loc_and_orientation(Point(0, 0), Orientation.named(Named.R90))
        assert Rect.from_xy(0, 0, 10, 20).transform(trans) == Rect.from_xy(-20, 0, 0, 10)
