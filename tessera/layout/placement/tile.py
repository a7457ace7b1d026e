"""
Tile - anything with a bounding box that can be drawn into a Group.

A ``Tile`` is a cheap handle: cloning it shares the wrapped value, so a
tile repeated many times in an array references one generated layout.
"""

from enum import Enum

from tessera.geometry.point import Point
from tessera.geometry.rect import Bbox, BoundBox, Rect
from tessera.geometry.shape import Element, Layer
from tessera.layout.group import Group, Instance
from tessera.layout.port import PortMap


class TileKind(Enum):
    GROUP = 'group'
    INSTANCE = 'instance'
    ELEMENT = 'element'
    CUSTOM = 'custom'


class Tile(BoundBox):
    """
    Shared handle over a drawable value.

    Args:
        value: A Group, Instance, Element, Tile, or any object providing
            ``bbox()`` and ``draw_ref()`` (and optionally ``ports()``)
    """

    def __init__(self, value):
        if isinstance(value, Tile):
            value = value.value
        if not isinstance(value, (Group, Instance, Element)):
            if not (hasattr(value, 'bbox') and hasattr(value, 'draw_ref')):
                raise TypeError(f"{type(value).__name__} cannot be used as a tile: "
                                f"needs bbox() and draw_ref()")
        self.value = value

    def __repr__(self):
        return f"Tile({self.kind.value}, {self.value!r})"

    @property
    def kind(self) -> TileKind:
        if isinstance(self.value, Group):
            return TileKind.GROUP
        if isinstance(self.value, Instance):
            return TileKind.INSTANCE
        if isinstance(self.value, Element):
            return TileKind.ELEMENT
        return TileKind.CUSTOM

    def clone(self) -> 'Tile':
        """New handle to the same underlying value."""
        return Tile(self.value)

    def bbox(self) -> Bbox:
        return self.value.bbox()

    def draw_ref(self) -> Group:
        """A fresh Group holding this tile's geometry, safe to translate."""
        if isinstance(self.value, Element):
            group = Group()
            group.add_element(self.value.copy())
            return group
        return self.value.draw_ref()

    def ports(self) -> PortMap:
        """The tile's own ports, in its local coordinates (copies)."""
        value = self.value
        if isinstance(value, Group):
            return value.ports.copy()
        if isinstance(value, Instance):
            return value.ports()
        if isinstance(value, Element):
            return PortMap()
        ports = getattr(value, 'ports', None)
        if ports is None:
            return PortMap()
        ports = ports() if callable(ports) else ports
        return ports.copy()


class _Wrapper:
    """Custom tile that overrides the bbox of an inner tile."""

    def __init__(self, inner):
        self.inner = Tile(inner)

    def draw_ref(self) -> Group:
        return self.inner.draw_ref()

    def ports(self) -> PortMap:
        return self.inner.ports()


class Pad(_Wrapper):
    """Grows the reported bbox of ``inner`` by the given margins, drawing nothing extra."""

    def __init__(self, inner, left: int = 0, bottom: int = 0, right: int = 0, top: int = 0):
        super().__init__(inner)
        self.left, self.bottom, self.right, self.top = left, bottom, right, top

    @classmethod
    def all(cls, inner, amount: int) -> 'Pad':
        return cls(inner, amount, amount, amount, amount)

    def bbox(self) -> Bbox:
        """Padded bbox; negative margins that cross over leave it empty."""
        box = self.inner.bbox()
        if box.is_empty():
            return box
        return Bbox(Point(box.p0.x - self.left, box.p0.y - self.bottom),
                    Point(box.p1.x + self.right, box.p1.y + self.top))


class LayerBbox(_Wrapper):
    """Reports the bbox of one layer of ``inner`` (e.g. a cell boundary layer)."""

    def __init__(self, inner, layer: Layer):
        super().__init__(inner)
        self.layer = layer

    def bbox(self) -> Bbox:
        value = self.inner.value
        if not hasattr(value, 'layer_bbox'):
            raise TypeError(f"{type(value).__name__} has no per-layer bounding box")
        return value.layer_bbox(self.layer)


class RectBbox(_Wrapper):
    """Reports a fixed rectangle as the bbox of ``inner``."""

    def __init__(self, inner, rect: Rect):
        super().__init__(inner)
        self.rect = rect

    def bbox(self) -> Bbox:
        return self.rect.bbox()


class RelativeRectBbox(_Wrapper):
    """Reports ``rect`` offset by the lower-left corner of the inner bbox.

    The reported box moves with the inner geometry.
    """

    def __init__(self, inner, rect: Rect):
        super().__init__(inner)
        self.rect = rect

    def bbox(self) -> Bbox:
        box = self.inner.bbox()
        if box.is_empty():
            return box
        return self.rect.translate(box.p0).bbox()


def as_tile(value) -> Tile:
    """Wrap ``value`` in a Tile unless it already is one."""
    return value if isinstance(value, Tile) else Tile(value)
