"""
Group and Instance - the drawable output of composition.

A ``Group`` accumulates elements, instances of other groups and ports in
absolute coordinates. An ``Instance`` places a shared, read-only group
with a transformation; copying an instance never copies its cell.
"""

from typing import Iterable, List, Optional

from tessera.geometry.align import AlignRect
from tessera.geometry.place_bbox import PlaceBbox
from tessera.geometry.point import Point
from tessera.geometry.rect import Bbox, BoundBox, Rect, union_all
from tessera.geometry.shape import Element, Layer, Shape
from tessera.geometry.transform import Orientation, Transformation
from tessera.layout.port import CellPort, PortConflictStrategy, PortId, PortMap


class Group(BoundBox, AlignRect, PlaceBbox):
    """
    Mutable collection of elements, instances and ports.

    Groups only translate; rotated or mirrored placement goes through
    :class:`Instance`.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self.elements: List[Element] = []
        self.instances: List['Instance'] = []
        self.ports = PortMap()

    def __repr__(self):
        return (f"Group({self.name}, elements={len(self.elements)}, "
                f"instances={len(self.instances)}, ports={len(self.ports)})")

    # ------------------------------------------------------------------
    # Adding content
    # ------------------------------------------------------------------

    def add_element(self, element: Element) -> Element:
        self.elements.append(element)
        return element

    def add_rect(self, layer: Layer, rect: Rect, net: Optional[str] = None) -> Element:
        """
        Add a rectangle.

        Args:
            layer: Layer for this shape
            rect: Rectangle in this group's coordinates (nm)
            net: Optional net name for connectivity

        Returns:
            The created Element
        """
        return self.add_element(Element(layer, rect, net=net))

    def add_shape(self, layer: Layer, shape: Shape, net: Optional[str] = None) -> Element:
        return self.add_element(Element(layer, shape, net=net))

    def add_instance(self, instance: 'Instance') -> 'Instance':
        self.instances.append(instance)
        return instance

    def add_port(self, port: CellPort,
                 strategy: PortConflictStrategy = PortConflictStrategy.ERROR) -> None:
        self.ports.add(port, strategy)

    def add_ports(self, ports: Iterable[CellPort],
                  strategy: PortConflictStrategy = PortConflictStrategy.ERROR) -> None:
        self.ports.extend(ports, strategy)

    def add_group(self, other: 'Group',
                  strategy: PortConflictStrategy = PortConflictStrategy.ERROR,
                  with_ports: bool = True) -> 'Group':
        """Move the contents of ``other`` into this group.

        ``other`` should not be used afterwards; pass ``other.copy()`` to keep it.

        Args:
            other: Group to merge
            strategy: Port conflict strategy
            with_ports: Also merge the ports of ``other``
        """
        self.elements.extend(other.elements)
        self.instances.extend(other.instances)
        if with_ports:
            self.ports.extend(other.ports, strategy)
        return self

    def port(self, id: PortId) -> CellPort:
        return self.ports.get(id)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def bbox(self) -> Bbox:
        """Union of all element and instance bounding boxes (empty if none)."""
        return union_all(self.elements).union(union_all(self.instances))

    def layer_bbox(self, layer: Layer) -> Bbox:
        """Bounding box of the shapes on ``layer`` only."""
        box = union_all(e for e in self.elements if e.layer == layer)
        for inst in self.instances:
            box = box.union(inst.layer_bbox(layer))
        return box

    def translate(self, p: Point) -> 'Group':
        """Translate all contents in place."""
        for element in self.elements:
            element.translate(p)
        for inst in self.instances:
            inst.translate(p)
        self.ports.translate(p)
        return self

    def flatten(self, _path: Optional[str] = None) -> List[Element]:
        """
        Get all elements in this group's coordinates, instances expanded.

        Each returned element has ``source`` set to its instance path.
        """
        path = _path or self.name or '<top>'
        result = []
        for element in self.elements:
            e = element.copy()
            e.source = e.source or path
            result.append(e)
        for i, inst in enumerate(self.instances):
            result.extend(inst.flatten(f"{path}.{inst.name or f'I{i}'}"))
        return result

    def copy(self) -> 'Group':
        """Copy elements, instances and ports. Instance cells stay shared."""
        group = Group(self.name)
        group.elements = [e.copy() for e in self.elements]
        group.instances = [inst.copy() for inst in self.instances]
        group.ports = self.ports.copy()
        return group

    def draw_ref(self) -> 'Group':
        return self.copy()

    def is_empty(self) -> bool:
        return not self.elements and not self.instances


class Instance(BoundBox, AlignRect, PlaceBbox):
    """
    A placement of a shared group.

    Attributes:
        cell: The placed group (shared between copies, treated as read-only)
        loc: Offset applied after the orientation
        orientation: Rotation and mirroring applied first
        name: Optional instance name used in flattened source paths
    """

    def __init__(self, cell: Group, loc: Point = Point(0, 0),
                 orientation: Orientation = Orientation(), name: Optional[str] = None):
        self.cell = cell
        self.loc = loc
        self.orientation = orientation
        self.name = name

    def __repr__(self):
        return f"Instance({self.name}, cell={self.cell.name}, loc={self.loc})"

    def transformation(self) -> Transformation:
        return Transformation.with_loc_and_orientation(self.loc, self.orientation)

    def _transformed_bbox(self, box: Bbox) -> Bbox:
        if box.is_empty():
            return box
        return box.into_rect().transform(self.transformation()).bbox()

    def bbox(self) -> Bbox:
        return self._transformed_bbox(self.cell.bbox())

    def layer_bbox(self, layer: Layer) -> Bbox:
        return self._transformed_bbox(self.cell.layer_bbox(layer))

    def translate(self, p: Point) -> 'Instance':
        self.loc = self.loc + p
        return self

    def set_orientation(self, orientation: Orientation) -> 'Instance':
        self.orientation = orientation
        return self

    def ports(self) -> PortMap:
        """Ports of the cell, transformed into the parent's coordinates."""
        return self.cell.ports.transformed(self.transformation())

    def port(self, id: PortId) -> CellPort:
        return self.cell.port(id).transformed(self.transformation())

    def flatten(self, _path: Optional[str] = None) -> List[Element]:
        trans = self.transformation()
        path = _path or self.name or self.cell.name or '<inst>'
        return [e.transformed(trans) for e in self.cell.flatten(path)]

    def copy(self) -> 'Instance':
        return Instance(self.cell, self.loc, self.orientation, self.name)

    def draw_ref(self) -> Group:
        group = Group(self.name)
        group.add_instance(self.copy())
        group.add_ports(self.ports())
        return group
