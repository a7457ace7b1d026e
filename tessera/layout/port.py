"""
Ports - named connection geometry exposed by a placed layout.

A port is identified by a :class:`PortId` (name plus bus index) and holds
shapes grouped by layer. Port maps merge ports from many tiles under a
configurable conflict strategy.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from tessera.errors import PortConflict
from tessera.geometry.point import Point
from tessera.geometry.rect import Bbox, union_all
from tessera.geometry.shape import Layer, Shape, shape_bbox
from tessera.logging import logger


@dataclass(frozen=True)
class PortId:
    """Port identifier: a name and a bus index (0 for scalar ports)."""
    name: str
    index: int = 0

    def __str__(self):
        return f"{self.name}[{self.index}]"


class PortConflictStrategy(Enum):
    """What to do when a port id is added twice."""
    ERROR = 'error'          # raise PortConflict
    IGNORE = 'ignore'        # keep the first port
    OVERWRITE = 'overwrite'  # keep the last port, log a warning
    MERGE = 'merge'          # union of both ports' shapes


@dataclass
class CellPort:
    """
    Port geometry grouped by layer.

    Attributes:
        id: Port identifier
        shapes: Shapes per layer, in the owning layout's coordinates
    """
    id: PortId
    shapes: Dict[Layer, List[Shape]] = field(default_factory=dict)

    @classmethod
    def with_shape(cls, id: PortId, layer: Layer, shape: Shape) -> 'CellPort':
        return cls(id, {layer: [shape]})

    def add(self, layer: Layer, shape: Shape) -> 'CellPort':
        self.shapes.setdefault(layer, []).append(shape)
        return self

    def shapes_on(self, layer: Layer) -> List[Shape]:
        return self.shapes.get(layer, [])

    def layers(self) -> List[Layer]:
        return list(self.shapes)

    def bbox(self) -> Bbox:
        return union_all(shape_bbox(s) for ss in self.shapes.values() for s in ss)

    def merge(self, other: 'CellPort') -> 'CellPort':
        """Append the shapes of ``other`` (in place)."""
        for layer, shapes in other.shapes.items():
            self.shapes.setdefault(layer, []).extend(shapes)
        return self

    def translate(self, p: Point) -> 'CellPort':
        """Translate in place."""
        self.shapes = {layer: [s.translate(p) for s in ss]
                       for layer, ss in self.shapes.items()}
        return self

    def transformed(self, trans) -> 'CellPort':
        return CellPort(self.id, {layer: [s.transform(trans) for s in ss]
                                  for layer, ss in self.shapes.items()})

    def with_id(self, id: PortId) -> 'CellPort':
        """Copy of this port under a different identifier."""
        return CellPort(id, {layer: list(ss) for layer, ss in self.shapes.items()})

    def copy(self) -> 'CellPort':
        return self.with_id(self.id)

    def __repr__(self):
        n = sum(len(ss) for ss in self.shapes.values())
        return f"CellPort({self.id}, shapes={n})"


class PortMap:
    """Ports keyed by :class:`PortId`."""

    def __init__(self, ports: Iterable[CellPort] = (),
                 strategy: PortConflictStrategy = PortConflictStrategy.ERROR):
        self._ports: Dict[PortId, CellPort] = {}
        for port in ports:
            self.add(port, strategy)

    def add(self, port: CellPort,
            strategy: PortConflictStrategy = PortConflictStrategy.ERROR) -> None:
        """
        Add a port, resolving identifier clashes with ``strategy``.

        Raises:
            PortConflict: If the id exists and strategy is ERROR
        """
        existing = self._ports.get(port.id)
        if existing is None:
            self._ports[port.id] = port
        elif strategy is PortConflictStrategy.ERROR:
            raise PortConflict(port.id)
        elif strategy is PortConflictStrategy.OVERWRITE:
            logger.warning(f"Overwriting port '{port.id}'")
            self._ports[port.id] = port
        elif strategy is PortConflictStrategy.MERGE:
            existing.merge(port)

    def extend(self, ports: Iterable[CellPort],
               strategy: PortConflictStrategy = PortConflictStrategy.ERROR) -> None:
        for port in ports:
            self.add(port, strategy)

    def get(self, id: PortId) -> CellPort:
        try:
            return self._ports[id]
        except KeyError:
            raise KeyError(f"No port '{id}'") from None

    def named(self, name: str) -> List[CellPort]:
        """All bus bits of ``name``, sorted by index."""
        return sorted((p for p in self._ports.values() if p.id.name == name),
                      key=lambda p: p.id.index)

    def translate(self, p: Point) -> None:
        for port in self._ports.values():
            port.translate(p)

    def transformed(self, trans) -> 'PortMap':
        return PortMap(port.transformed(trans) for port in self._ports.values())

    def copy(self) -> 'PortMap':
        return PortMap(port.copy() for port in self._ports.values())

    def __contains__(self, id: PortId) -> bool:
        return id in self._ports

    def __iter__(self) -> Iterator[CellPort]:
        return iter(self._ports.values())

    def __len__(self) -> int:
        return len(self._ports)

    def __repr__(self):
        return f"PortMap({[str(i) for i in self._ports]})"


PortMapFn = Callable[[CellPort, object], Optional[CellPort]]


def identity_port_map(port: CellPort, meta) -> CellPort:
    """Expose every port unchanged."""
    return port


def bus_port_map(names: Optional[Iterable[str]] = None) -> PortMapFn:
    """
    Port map that turns each tile's port into the bus bit given by the tile index.

    Args:
        names: Port names to re-index. Other ports pass through unchanged.
            None re-indexes all ports.

    Returns:
        A port map function for :meth:`ArrayTiler.expose_ports`
    """
    selected = None if names is None else set(names)

    def fn(port: CellPort, meta) -> CellPort:
        if not isinstance(meta, int):
            raise TypeError(f"bus_port_map needs an integer tile index, got {meta!r}")
        if selected is not None and port.id.name not in selected:
            return port
        return port.with_id(PortId(port.id.name, meta))

    return fn


def keep_ports(names: Iterable[str]) -> PortMapFn:
    """Port map that drops every port whose name is not in ``names``."""
    selected = set(names)

    def fn(port: CellPort, meta) -> Optional[CellPort]:
        return port if port.id.name in selected else None

    return fn
