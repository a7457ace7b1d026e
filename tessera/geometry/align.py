"""
Alignment of one bounding box relative to another.

``AlignRect`` is a mixin for anything with ``bbox()`` and
``translate(p)``. Containers translate in place and return themselves;
immutable values (``Rect``) return a translated copy. Always use the
return value.
"""

from enum import Enum

from tessera.errors import EmptyGeometry
from tessera.geometry.point import Corner, Dir, Point, Side, snap_to_grid


class AlignMode(Enum):
    LEFT = 'left'
    RIGHT = 'right'
    BOTTOM = 'bottom'
    TOP = 'top'
    CENTER_HORIZONTAL = 'center_horizontal'
    CENTER_VERTICAL = 'center_vertical'
    TO_THE_RIGHT = 'to_the_right'
    TO_THE_LEFT = 'to_the_left'
    BENEATH = 'beneath'
    ABOVE = 'above'


def align_offset(mode: AlignMode, sbox, obox, space: int = 0) -> Point:
    """
    Translation that aligns ``sbox`` to ``obox`` according to ``mode``.

    Args:
        mode: Alignment rule
        sbox: Bounding box being moved
        obox: Reference bounding box
        space: Signed offset added along the aligned axis (subtracted for
            TO_THE_LEFT and BENEATH so that positive space is always a gap)

    Raises:
        EmptyGeometry: If either bounding box is empty
    """
    if sbox.is_empty() or obox.is_empty():
        raise EmptyGeometry(f"Cannot align {mode.name}: empty bounding box")
    s0, s1, o0, o1 = sbox.p0, sbox.p1, obox.p0, obox.p1

    if mode is AlignMode.LEFT:
        return Point(o0.x - s0.x + space, 0)
    if mode is AlignMode.RIGHT:
        return Point(o1.x - s1.x + space, 0)
    if mode is AlignMode.BOTTOM:
        return Point(0, o0.y - s0.y + space)
    if mode is AlignMode.TOP:
        return Point(0, o1.y - s1.y + space)
    if mode is AlignMode.CENTER_HORIZONTAL:
        return Point(((o0.x + o1.x) - (s0.x + s1.x)) // 2 + space, 0)
    if mode is AlignMode.CENTER_VERTICAL:
        return Point(0, ((o0.y + o1.y) - (s0.y + s1.y)) // 2 + space)
    if mode is AlignMode.TO_THE_RIGHT:
        return Point(o1.x - s0.x + space, 0)
    if mode is AlignMode.TO_THE_LEFT:
        return Point(o0.x - s1.x - space, 0)
    if mode is AlignMode.BENEATH:
        return Point(0, o0.y - s1.y - space)
    if mode is AlignMode.ABOVE:
        return Point(0, o1.y - s0.y + space)
    raise ValueError(f"Unknown align mode: {mode!r}")


class AlignRect:
    """Alignment helpers built on ``bbox()`` and ``translate()``."""

    def align(self, mode: AlignMode, other, space: int = 0):
        """Align to ``other`` (anything with a bbox) and return the moved object."""
        return self.translate(align_offset(mode, self.bbox(), other.bbox(), space))

    def align_left(self, other, space: int = 0):
        return self.align(AlignMode.LEFT, other, space)

    def align_right(self, other, space: int = 0):
        return self.align(AlignMode.RIGHT, other, space)

    def align_bottom(self, other, space: int = 0):
        return self.align(AlignMode.BOTTOM, other, space)

    def align_top(self, other, space: int = 0):
        return self.align(AlignMode.TOP, other, space)

    def align_to_the_right_of(self, other, space: int = 0):
        return self.align(AlignMode.TO_THE_RIGHT, other, space)

    def align_to_the_left_of(self, other, space: int = 0):
        return self.align(AlignMode.TO_THE_LEFT, other, space)

    def align_beneath(self, other, space: int = 0):
        return self.align(AlignMode.BENEATH, other, space)

    def align_above(self, other, space: int = 0):
        return self.align(AlignMode.ABOVE, other, space)

    def align_centers_horizontally(self, other):
        return self.align(AlignMode.CENTER_HORIZONTAL, other)

    def align_centers_vertically(self, other):
        return self.align(AlignMode.CENTER_VERTICAL, other)

    def align_centers(self, other):
        return self.align_centers_horizontally(other).align_centers_vertically(other)

    def _snap_axis(self, dir: Dir, grid: int):
        box = self.bbox()
        length = box.width() if dir is Dir.HORIZ else box.height()
        if length % grid != 0:
            raise ValueError(
                f"Cannot center on grid {grid}: {dir.value} size {length} is not a multiple")
        pos = box.p0.coord(dir)
        return self.translate(Point.from_dir_coords(dir, snap_to_grid(pos, grid) - pos, 0))

    def align_centers_horizontally_gridded(self, other, grid: int):
        """Center horizontally on ``other``, then snap the left edge to ``grid``.

        Raises:
            ValueError: If the width is not a multiple of grid
        """
        return self.align_centers_horizontally(other)._snap_axis(Dir.HORIZ, grid)

    def align_centers_vertically_gridded(self, other, grid: int):
        return self.align_centers_vertically(other)._snap_axis(Dir.VERT, grid)

    def align_centers_gridded(self, other, grid: int):
        return (self.align_centers_horizontally_gridded(other, grid)
                .align_centers_vertically_gridded(other, grid))

    def align_corner_to_grid(self, corner: Corner, grid: int):
        """Translate so that ``corner`` of the bbox lies on the grid."""
        box = self.bbox()
        if box.is_empty():
            raise EmptyGeometry("Cannot snap an empty bounding box to grid")
        x = box.p0.x if corner in (Corner.LOWER_LEFT, Corner.UPPER_LEFT) else box.p1.x
        y = box.p0.y if corner in (Corner.LOWER_LEFT, Corner.LOWER_RIGHT) else box.p1.y
        return self.translate(Point(snap_to_grid(x, grid) - x, snap_to_grid(y, grid) - y))

    def align_side_to_grid(self, side: Side, grid: int):
        """Translate perpendicular to ``side`` so that it lies on the grid."""
        box = self.bbox()
        if box.is_empty():
            raise EmptyGeometry("Cannot snap an empty bounding box to grid")
        pos = {Side.LEFT: box.p0.x, Side.RIGHT: box.p1.x,
               Side.BOT: box.p0.y, Side.TOP: box.p1.y}[side]
        return self.translate(Point.from_dir_coords(side.dir, snap_to_grid(pos, grid) - pos, 0))
