"""
Shape and Layer classes for layout geometry.

A shape is one of ``Rect``, ``Polygon``, ``Path`` or ``Point``; each
carries a ``kind`` tag and implements ``bbox()``, ``translate()`` and
``transform()``. An ``Element`` is a shape drawn on a layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import shapely
from shapely import box

from tessera.geometry.point import Point
from tessera.geometry.rect import Bbox, BoundBox, Rect, union_all


class ShapeKind(Enum):
    RECT = 'rect'
    POLYGON = 'polygon'
    PATH = 'path'
    POINT = 'point'


@dataclass(frozen=True)
class Polygon(BoundBox):
    """Closed polygon given by its vertices."""
    points: Tuple[Point, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(self.points))

    def bbox(self) -> Bbox:
        return union_all(self.points)

    def translate(self, p: Point) -> 'Polygon':
        return Polygon(tuple(q + p for q in self.points))

    def transform(self, trans) -> 'Polygon':
        return Polygon(tuple(trans.apply(q) for q in self.points))


@dataclass(frozen=True)
class Path(BoundBox):
    """Centerline path of a given width.

    The bounding box is that of the centerline vertices.
    """
    points: Tuple[Point, ...] = ()
    width: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(self.points))

    def bbox(self) -> Bbox:
        return union_all(self.points)

    def translate(self, p: Point) -> 'Path':
        return Path(tuple(q + p for q in self.points), self.width)

    def transform(self, trans) -> 'Path':
        return Path(tuple(trans.apply(q) for q in self.points), self.width)


Shape = Union[Rect, Polygon, Path, Point]

_KINDS = {Rect: ShapeKind.RECT, Polygon: ShapeKind.POLYGON,
          Path: ShapeKind.PATH, Point: ShapeKind.POINT}


def shape_kind(shape: Shape) -> ShapeKind:
    try:
        return _KINDS[type(shape)]
    except KeyError:
        raise TypeError(f"Not a shape: {type(shape).__name__}") from None


def shape_bbox(shape: Shape) -> Bbox:
    if isinstance(shape, Point):
        return Bbox.from_point(shape)
    return shape.bbox()


@dataclass
class Layer:
    """
    Layer definition.

    Attributes:
        name: Generic layer name (e.g., 'met1', 'poly', 'diff')
        purpose: Layer purpose (e.g., 'drawing', 'pin', 'label')
        connectivity: Whether this layer carries electrical connectivity.
            Set to True for conductive layers (metals, poly, diffusion,
            vias). Defaults to False; PDK code must opt in.
    """
    name: str
    purpose: str = 'drawing'
    connectivity: bool = False

    def __hash__(self):
        return hash((self.name, self.purpose))

    def __eq__(self, other):
        if isinstance(other, Layer):
            return self.name == other.name and self.purpose == other.purpose
        return False

    def __str__(self):
        return f"{self.name}:{self.purpose}"


@dataclass
class Element:
    """
    A shape drawn on a layer, with optional net information.

    Attributes:
        layer: Layer this shape is on
        shape: Rect, Polygon, Path or Point
        net: Net name for connectivity (optional)
        source: Hierarchy path for provenance (set during flatten)
    """
    layer: Layer
    shape: Shape
    net: Optional[str] = None
    source: Optional[str] = None

    @property
    def kind(self) -> ShapeKind:
        return shape_kind(self.shape)

    def bbox(self) -> Bbox:
        return shape_bbox(self.shape)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """Return bounding box as (x0, y0, x1, y1)."""
        b = self.bbox()
        return (b.p0.x, b.p0.y, b.p1.x, b.p1.y)

    @property
    def geometry(self) -> shapely.Geometry:
        """Shapely geometry of the shape, for overlap queries."""
        s = self.shape
        if isinstance(s, Rect):
            return box(s.p0.x, s.p0.y, s.p1.x, s.p1.y)
        if isinstance(s, Polygon):
            return shapely.Polygon([(p.x, p.y) for p in s.points])
        if isinstance(s, Path):
            line = shapely.LineString([(p.x, p.y) for p in s.points])
            return line.buffer(s.width / 2, cap_style='flat', join_style='mitre')
        return shapely.Point(s.x, s.y)

    def translate(self, p: Point) -> None:
        """Translate in place."""
        self.shape = self.shape.translate(p)

    def transformed(self, trans) -> 'Element':
        """Return a new Element with transform applied.

        Preserves net, source, and layer.
        """
        return Element(self.layer, self.shape.transform(trans), self.net, self.source)

    def copy(self) -> 'Element':
        return Element(self.layer, self.shape, self.net, self.source)

    def __repr__(self):
        src = f", source='{self.source}'" if self.source else ''
        return f"Element({self.layer}, {self.shape!r}, net={self.net}{src})"
