"""
Integer points, dimensions and direction tags.

All coordinates are integers in nanometers.
"""

from dataclasses import dataclass
from enum import Enum

INT_MAX = 2 ** 63 - 1
INT_MIN = -2 ** 63


def snap_to_grid(pos: int, grid: int) -> int:
    """Round ``pos`` to the nearest multiple of ``grid``.

    Ties (remainder exactly ``grid / 2``) round down.

    Raises:
        ValueError: If grid is not positive
    """
    if grid <= 0:
        raise ValueError(f"grid must be positive, got {grid}")
    rem = pos % grid
    if rem <= grid // 2:
        return pos - rem
    return pos + grid - rem


class Dir(Enum):
    """Axis direction."""
    HORIZ = 'horiz'
    VERT = 'vert'

    def other(self) -> 'Dir':
        return Dir.VERT if self is Dir.HORIZ else Dir.HORIZ


class Side(Enum):
    LEFT = 'left'
    RIGHT = 'right'
    BOT = 'bot'
    TOP = 'top'

    @property
    def dir(self) -> Dir:
        """Direction of the coordinate the side constrains."""
        return Dir.HORIZ if self in (Side.LEFT, Side.RIGHT) else Dir.VERT


class Corner(Enum):
    LOWER_LEFT = 'll'
    LOWER_RIGHT = 'lr'
    UPPER_LEFT = 'ul'
    UPPER_RIGHT = 'ur'


@dataclass(frozen=True)
class Point:
    """Immutable integer point."""
    x: int = 0
    y: int = 0

    @classmethod
    def zero(cls) -> 'Point':
        return cls(0, 0)

    @classmethod
    def from_dir_coords(cls, dir: Dir, a: int, b: int) -> 'Point':
        """Build a point where ``a`` lies along ``dir`` and ``b`` along the other axis."""
        if dir is Dir.HORIZ:
            return cls(a, b)
        return cls(b, a)

    def coord(self, dir: Dir) -> int:
        return self.x if dir is Dir.HORIZ else self.y

    def translate(self, p: 'Point') -> 'Point':
        return Point(self.x + p.x, self.y + p.y)

    def transform(self, trans) -> 'Point':
        return trans.apply(self)

    def snap_to_grid(self, grid: int) -> 'Point':
        return Point(snap_to_grid(self.x, grid), snap_to_grid(self.y, grid))

    def bbox(self):
        from tessera.geometry.rect import Bbox
        return Bbox.from_point(self)

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> 'Point':
        return Point(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self):
        return f"Point({self.x}, {self.y})"


@dataclass(frozen=True)
class Dims:
    """Width and height pair."""
    w: int
    h: int

    @classmethod
    def square(cls, n: int) -> 'Dims':
        return cls(n, n)

    def dim(self, dir: Dir) -> int:
        return self.w if dir is Dir.HORIZ else self.h

    def transpose(self) -> 'Dims':
        return Dims(self.h, self.w)

    def into_point(self) -> Point:
        return Point(self.w, self.h)

    def __repr__(self):
        return f"Dims({self.w}, {self.h})"
