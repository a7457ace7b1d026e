"""
Transformation - Position, rotation, and mirroring for placed geometry.

Transformations are exact: the eight rectangular orientations are
represented as integer matrices, so no floating point is involved.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from tessera.geometry.point import Point

_COS_SIN = {0: (1, 0), 90: (0, 1), 180: (-1, 0), 270: (0, -1)}


@dataclass(frozen=True)
class Orientation:
    """
    One of the eight rectangular orientations.

    Attributes:
        reflect_vert: Mirror about the x axis (flip y), applied first
        angle: Counter-clockwise rotation in degrees (0, 90, 180, 270)
    """
    reflect_vert: bool = False
    angle: int = 0

    def __post_init__(self):
        if self.angle not in _COS_SIN:
            raise ValueError(f"Orientation angle must be 0, 90, 180 or 270, got {self.angle}")

    @classmethod
    def named(cls, name: 'Named') -> 'Orientation':
        return cls(*name.value)

    def matrix(self) -> Tuple[int, int, int, int]:
        """Row-major 2x2 matrix ``(a00, a01, a10, a11)``."""
        c, s = _COS_SIN[self.angle]
        if self.reflect_vert:
            return (c, s, s, -c)
        return (c, -s, s, c)


class Named(Enum):
    """Named orientations, valued as ``(reflect_vert, angle)``."""
    R0 = (False, 0)
    R90 = (False, 90)
    R180 = (False, 180)
    R270 = (False, 270)
    REFLECT_VERT = (True, 0)
    REFLECT_HORIZ = (True, 180)
    R90_REFLECT_VERT = (True, 90)
    R270_REFLECT_VERT = (True, 270)


@dataclass(frozen=True)
class Transformation:
    """
    Integer affine transform ``p -> a @ p + b``.

    The reflection is applied first, then the rotation, then the
    translation.
    """
    a: Tuple[int, int, int, int] = (1, 0, 0, 1)
    b: Point = Point(0, 0)

    @classmethod
    def identity(cls) -> 'Transformation':
        return cls()

    @classmethod
    def translate(cls, x: int, y: int) -> 'Transformation':
        return cls(b=Point(x, y))

    @classmethod
    def with_loc_and_orientation(cls, loc: Point,
                                 orientation: Orientation = Orientation()) -> 'Transformation':
        return cls(a=orientation.matrix(), b=loc)

    @classmethod
    def cascade(cls, parent: 'Transformation', child: 'Transformation') -> 'Transformation':
        """Transform that applies ``child`` first, then ``parent``."""
        p00, p01, p10, p11 = parent.a
        c00, c01, c10, c11 = child.a
        a = (p00 * c00 + p01 * c10, p00 * c01 + p01 * c11,
             p10 * c00 + p11 * c10, p10 * c01 + p11 * c11)
        return cls(a=a, b=parent.apply(child.b))

    def apply(self, p: Point) -> Point:
        """Apply transform to a point."""
        a00, a01, a10, a11 = self.a
        return Point(a00 * p.x + a01 * p.y + self.b.x,
                     a10 * p.x + a11 * p.y + self.b.y)

    def offset_point(self) -> Point:
        return self.b

    def orientation(self) -> Orientation:
        """Recover the orientation encoded in the matrix."""
        a00, a01, a10, a11 = self.a
        reflect = a00 * a11 - a01 * a10 < 0
        angle = next(ang for ang, cs in _COS_SIN.items() if cs == (a00, a10))
        return Orientation(reflect, angle)
