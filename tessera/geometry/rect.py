"""
Rectangles and bounding boxes.

``Rect`` is always a valid rectangle (``p0 <= p1`` on both axes).
``Bbox`` may additionally be empty, represented by the sentinel
``p0 = (INT_MAX, INT_MAX)``, ``p1 = (INT_MIN, INT_MIN)``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from tessera.errors import EmptyGeometry
from tessera.geometry.align import AlignRect
from tessera.geometry.place_bbox import PlaceBbox
from tessera.geometry.point import (
    INT_MAX, INT_MIN, Corner, Dims, Dir, Point, Side, snap_to_grid,
)


class ExpandMode(Enum):
    """Which corner(s) move when a rectangle grows by some dims."""
    ALL = 'all'
    LOWER_LEFT = 'll'
    LOWER_RIGHT = 'lr'
    UPPER_LEFT = 'ul'
    UPPER_RIGHT = 'ur'


def bbox_of(obj) -> 'Bbox':
    """Bounding box of anything with a ``bbox()`` method."""
    if isinstance(obj, Bbox):
        return obj
    try:
        fn = obj.bbox
    except AttributeError:
        raise TypeError(f"{type(obj).__name__} has no bounding box") from None
    return fn()


def union_all(objs: Iterable) -> 'Bbox':
    """Union of the bounding boxes of ``objs`` (empty if there are none)."""
    result = Bbox.empty()
    for obj in objs:
        result = result.union(bbox_of(obj))
    return result


class BoundBox:
    """Mixin for objects with a bounding box.

    Subclasses implement ``bbox()``; ``brect``, ``intersection`` and
    ``union`` are derived from it.
    """

    def bbox(self) -> 'Bbox':
        raise NotImplementedError

    def brect(self) -> 'Rect':
        """Bounding rectangle. Raises EmptyGeometry if the bbox is empty."""
        return self.bbox().into_rect()

    def intersection(self, other) -> 'Bbox':
        return self.bbox().intersection(bbox_of(other))

    def union(self, other) -> 'Bbox':
        return self.bbox().union(bbox_of(other))


@dataclass(frozen=True)
class Bbox(BoundBox):
    """Possibly-empty axis-aligned bounding box.

    Use :meth:`new` to build one from two arbitrary corners and
    :meth:`empty` for the empty box. Inverted corners collapse to the
    empty sentinel.
    """
    p0: Point
    p1: Point

    def __post_init__(self):
        if self.p0.x > self.p1.x or self.p0.y > self.p1.y:
            object.__setattr__(self, 'p0', Point(INT_MAX, INT_MAX))
            object.__setattr__(self, 'p1', Point(INT_MIN, INT_MIN))

    @classmethod
    def new(cls, p0: Point, p1: Point) -> 'Bbox':
        """Bounding box of two corners (normalized to min/max)."""
        return cls(Point(min(p0.x, p1.x), min(p0.y, p1.y)),
                   Point(max(p0.x, p1.x), max(p0.y, p1.y)))

    @classmethod
    def empty(cls) -> 'Bbox':
        return cls(Point(INT_MAX, INT_MAX), Point(INT_MIN, INT_MIN))

    @classmethod
    def zero(cls) -> 'Bbox':
        return cls(Point.zero(), Point.zero())

    @classmethod
    def from_point(cls, p: Point) -> 'Bbox':
        return cls(p, p)

    @classmethod
    def from_rect(cls, rect: 'Rect') -> 'Bbox':
        return cls(rect.p0, rect.p1)

    def bbox(self) -> 'Bbox':
        return self

    def is_empty(self) -> bool:
        return self.p0.x > self.p1.x or self.p0.y > self.p1.y

    def _check_nonempty(self, what: str) -> None:
        if self.is_empty():
            raise EmptyGeometry(f"{what} of an empty bounding box")

    def into_rect(self) -> 'Rect':
        """Convert to a Rect. Raises EmptyGeometry for the empty box."""
        self._check_nonempty('Rect')
        return Rect(self.p0, self.p1)

    def width(self) -> int:
        self._check_nonempty('Width')
        return self.p1.x - self.p0.x

    def height(self) -> int:
        self._check_nonempty('Height')
        return self.p1.y - self.p0.y

    def size(self) -> Dims:
        return Dims(self.width(), self.height())

    def center(self) -> Point:
        self._check_nonempty('Center')
        return Point((self.p0.x + self.p1.x) // 2, (self.p0.y + self.p1.y) // 2)

    def contains(self, p: Point) -> bool:
        return self.p0.x <= p.x <= self.p1.x and self.p0.y <= p.y <= self.p1.y

    def expand(self, amount: int) -> 'Bbox':
        """Grow on every side by ``amount``. An empty box stays empty."""
        if self.is_empty():
            return self
        return Bbox(Point(self.p0.x - amount, self.p0.y - amount),
                    Point(self.p1.x + amount, self.p1.y + amount)).normalized()

    def normalized(self) -> 'Bbox':
        """Canonical form: any inverted box becomes the empty sentinel."""
        return Bbox.empty() if self.is_empty() else self

    def intersection(self, other) -> 'Bbox':
        other = bbox_of(other)
        return Bbox(Point(max(self.p0.x, other.p0.x), max(self.p0.y, other.p0.y)),
                    Point(min(self.p1.x, other.p1.x), min(self.p1.y, other.p1.y))).normalized()

    def union(self, other) -> 'Bbox':
        other = bbox_of(other)
        return Bbox(Point(min(self.p0.x, other.p0.x), min(self.p0.y, other.p0.y)),
                    Point(max(self.p1.x, other.p1.x), max(self.p1.y, other.p1.y)))

    def translate(self, p: Point) -> 'Bbox':
        if self.is_empty():
            return self
        return Bbox(self.p0 + p, self.p1 + p)

    def __repr__(self):
        if self.is_empty():
            return "Bbox(empty)"
        return f"Bbox(({self.p0.x}, {self.p0.y}), ({self.p1.x}, {self.p1.y}))"


@dataclass(frozen=True)
class Rect(BoundBox, AlignRect, PlaceBbox):
    """Axis-aligned rectangle with integer corners.

    The constructor normalizes the corners, so ``p0`` is always the
    lower-left and ``p1`` the upper-right corner. Zero width or height is
    allowed.
    """
    p0: Point
    p1: Point

    def __post_init__(self):
        p0, p1 = self.p0, self.p1
        object.__setattr__(self, 'p0', Point(min(p0.x, p1.x), min(p0.y, p1.y)))
        object.__setattr__(self, 'p1', Point(max(p0.x, p1.x), max(p0.y, p1.y)))

    @classmethod
    def new(cls, p0: Point, p1: Point) -> 'Rect':
        return cls(p0, p1)

    @classmethod
    def from_xy(cls, x0: int, y0: int, x1: int, y1: int) -> 'Rect':
        return cls(Point(x0, y0), Point(x1, y1))

    @classmethod
    def from_point(cls, p: Point) -> 'Rect':
        return cls(p, p)

    @classmethod
    def with_dims(cls, w: int, h: int) -> 'Rect':
        """Rectangle of the given size with its lower-left corner at the origin."""
        return cls(Point.zero(), Point(w, h))

    @classmethod
    def from_dims(cls, dims: Dims, p0: Point = Point.zero()) -> 'Rect':
        return cls(p0, Point(p0.x + dims.w, p0.y + dims.h))

    def bbox(self) -> Bbox:
        return Bbox(self.p0, self.p1)

    def brect(self) -> 'Rect':
        return self

    @property
    def left(self) -> int:
        return self.p0.x

    @property
    def right(self) -> int:
        return self.p1.x

    @property
    def bottom(self) -> int:
        return self.p0.y

    @property
    def top(self) -> int:
        return self.p1.y

    def width(self) -> int:
        return self.p1.x - self.p0.x

    def height(self) -> int:
        return self.p1.y - self.p0.y

    def area(self) -> int:
        return self.width() * self.height()

    def dims(self) -> Dims:
        return Dims(self.width(), self.height())

    def center(self) -> Point:
        return Point((self.p0.x + self.p1.x) // 2, (self.p0.y + self.p1.y) // 2)

    def length(self, dir: Dir) -> int:
        return self.width() if dir is Dir.HORIZ else self.height()

    def longer_dir(self) -> Dir:
        """Direction of the longer side; squares count as vertical."""
        return Dir.HORIZ if self.width() > self.height() else Dir.VERT

    def shorter_dir(self) -> Dir:
        return self.longer_dir().other()

    def contains(self, p: Point) -> bool:
        return self.p0.x <= p.x <= self.p1.x and self.p0.y <= p.y <= self.p1.y

    def corner(self, corner: Corner) -> Point:
        return {
            Corner.LOWER_LEFT: self.p0,
            Corner.LOWER_RIGHT: Point(self.p1.x, self.p0.y),
            Corner.UPPER_LEFT: Point(self.p0.x, self.p1.y),
            Corner.UPPER_RIGHT: self.p1,
        }[corner]

    def side(self, side: Side) -> int:
        return {
            Side.LEFT: self.p0.x,
            Side.RIGHT: self.p1.x,
            Side.BOT: self.p0.y,
            Side.TOP: self.p1.y,
        }[side]

    def _checked(self, p0: Point, p1: Point, what: str) -> 'Rect':
        if p0.x > p1.x or p0.y > p1.y:
            raise EmptyGeometry(f"{what} of {self} leaves no area")
        return Rect(p0, p1)

    def expand(self, amount: int) -> 'Rect':
        """Grow every side by ``amount``; negative values shrink.

        Raises:
            EmptyGeometry: If a negative amount would invert the rectangle
        """
        return self._checked(Point(self.p0.x - amount, self.p0.y - amount),
                             Point(self.p1.x + amount, self.p1.y + amount), 'Expanding')

    def shrink(self, amount: int) -> 'Rect':
        return self.expand(-amount)

    def expand_dir(self, dir: Dir, amount: int) -> 'Rect':
        """Grow both sides along ``dir`` by ``amount``."""
        d = Point.from_dir_coords(dir, amount, 0)
        return self._checked(self.p0 - d, self.p1 + d, 'Expanding')

    def expand_side(self, side: Side, amount: int) -> 'Rect':
        """Move one side outward by ``amount``."""
        if side is Side.LEFT:
            return self._checked(Point(self.p0.x - amount, self.p0.y), self.p1, 'Expanding')
        if side is Side.RIGHT:
            return self._checked(self.p0, Point(self.p1.x + amount, self.p1.y), 'Expanding')
        if side is Side.BOT:
            return self._checked(Point(self.p0.x, self.p0.y - amount), self.p1, 'Expanding')
        return self._checked(self.p0, Point(self.p1.x, self.p1.y + amount), 'Expanding')

    def expand_dims(self, dims: Dims, mode: ExpandMode = ExpandMode.ALL) -> 'Rect':
        """Grow by ``dims`` (w horizontally, h vertically) at the corner(s) given by ``mode``."""
        d = dims.into_point()
        if mode is ExpandMode.ALL:
            return self._checked(self.p0 - d, self.p1 + d, 'Expanding')
        if mode is ExpandMode.LOWER_LEFT:
            return self._checked(self.p0 - d, self.p1, 'Expanding')
        if mode is ExpandMode.UPPER_RIGHT:
            return self._checked(self.p0, self.p1 + d, 'Expanding')
        if mode is ExpandMode.LOWER_RIGHT:
            return self._checked(Point(self.p0.x, self.p0.y - d.y),
                                 Point(self.p1.x + d.x, self.p1.y), 'Expanding')
        return self._checked(Point(self.p0.x - d.x, self.p0.y),
                             Point(self.p1.x, self.p1.y + d.y), 'Expanding')

    def translate(self, p: Point) -> 'Rect':
        return Rect(self.p0 + p, self.p1 + p)

    def transform(self, trans) -> 'Rect':
        return Rect(trans.apply(self.p0), trans.apply(self.p1))

    def snap_to_grid(self, grid: int) -> 'Rect':
        return Rect(self.p0.snap_to_grid(grid), self.p1.snap_to_grid(grid))

    def is_on_grid(self, grid: int) -> bool:
        return all(snap_to_grid(v, grid) == v
                   for v in (self.p0.x, self.p0.y, self.p1.x, self.p1.y))

    def __repr__(self):
        return f"Rect(({self.p0.x}, {self.p0.y}), ({self.p1.x}, {self.p1.y}))"
