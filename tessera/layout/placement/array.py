"""
ArrayTiler - sequential 1-D composition.

Each tile is aligned against the already placed rectangle of the tile
before it (the first one against a zero-size rectangle at the origin).
"""

from typing import Iterable, List, Optional

from tessera.errors import IncompleteBuilder
from tessera.geometry.align import AlignMode
from tessera.geometry.point import Point
from tessera.geometry.rect import Bbox, BoundBox, Rect, union_all
from tessera.layout.group import Group
from tessera.layout.placement.tile import Tile, as_tile
from tessera.layout.port import (
    PortConflictStrategy, PortMap, PortMapFn, identity_port_map,
)
from tessera.logging import logger


class ArrayTiler(BoundBox):
    """
    Tiles placed one after another.

    Args:
        tiles: Tiles (or anything ``Tile`` accepts), in placement order
        mode: Primary alignment of each tile against the previous one
        space: Spacing for the primary alignment
        alt_mode: Optional secondary alignment, applied after ``mode``
        alt_space: Spacing for the secondary alignment

    Example:
        tiler = (ArrayTiler.builder()
                 .push_num(unit_cell, 8)
                 .mode(AlignMode.TO_THE_RIGHT)
                 .alt_mode(AlignMode.CENTER_VERTICAL)
                 .build())
        group = tiler.generate()
    """

    def __init__(self, tiles: Iterable, mode: AlignMode, space: int = 0,
                 alt_mode: Optional[AlignMode] = None, alt_space: int = 0):
        self.tiles: List[Tile] = [as_tile(t) for t in tiles]
        self.mode = mode
        self.space = space
        self.alt_mode = alt_mode
        self.alt_space = alt_space
        self.cells: List[Rect] = []
        self.ports = PortMap()

        prev = Rect.from_point(Point.zero())
        for tile in self.tiles:
            rect = tile.brect().align(mode, prev, space)
            if alt_mode is not None:
                rect = rect.align(alt_mode, prev, alt_space)
            self.cells.append(rect)
            prev = rect
        logger.debug(f"ArrayTiler placed {len(self.cells)} tiles ({mode.name})")

    @staticmethod
    def builder() -> 'ArrayTilerBuilder':
        return ArrayTilerBuilder()

    def __len__(self) -> int:
        return len(self.tiles)

    def __repr__(self):
        return f"ArrayTiler(tiles={len(self.tiles)}, mode={self.mode.name})"

    def cell(self, i: int) -> Rect:
        """Absolute rectangle reserved for tile ``i``."""
        return self.cells[i]

    def translation(self, i: int) -> Point:
        """Offset that moves tile ``i`` from its own position into its cell."""
        return self.cells[i].p0 - self.tiles[i].bbox().p0

    def tile_ports(self, i: int) -> PortMap:
        """Ports of tile ``i`` in placed coordinates."""
        ports = self.tiles[i].ports()
        ports.translate(self.translation(i))
        return ports

    def expose_ports(self, port_map_fn: PortMapFn = identity_port_map,
                     strategy: PortConflictStrategy = PortConflictStrategy.ERROR) -> PortMap:
        """
        Add the placed ports of every tile to this tiler's port map.

        Args:
            port_map_fn: Called as ``fn(port, i)``; returns the port to expose
                (possibly renamed or re-indexed) or None to drop it
            strategy: Conflict strategy for identical port ids

        Returns:
            The tiler's port map
        """
        for i in range(len(self.tiles)):
            for port in self.tile_ports(i):
                mapped = port_map_fn(port, i)
                if mapped is not None:
                    self.ports.add(mapped, strategy)
        return self.ports

    def bbox(self) -> Bbox:
        return union_all(self.cells)

    def generate(self) -> Group:
        """Draw every tile at its cell, plus the exposed ports."""
        group = Group()
        for i, tile in enumerate(self.tiles):
            drawn = tile.draw_ref().translate(self.translation(i))
            group.add_group(drawn, with_ports=False)
        group.add_ports(p.copy() for p in self.ports)
        return group

    def draw_ref(self) -> Group:
        return self.generate()


class ArrayTilerBuilder:
    """Accumulates tiles and alignment settings for an :class:`ArrayTiler`."""

    def __init__(self):
        self._tiles: List[Tile] = []
        self._mode: Optional[AlignMode] = None
        self._space = 0
        self._alt_mode: Optional[AlignMode] = None
        self._alt_space = 0

    def push(self, tile) -> 'ArrayTilerBuilder':
        self._tiles.append(as_tile(tile))
        return self

    def push_num(self, tile, num: int) -> 'ArrayTilerBuilder':
        """Push ``num`` handles sharing the same tile."""
        tile = as_tile(tile)
        self._tiles.extend(tile.clone() for _ in range(num))
        return self

    def mode(self, mode: AlignMode) -> 'ArrayTilerBuilder':
        self._mode = mode
        return self

    def space(self, space: int) -> 'ArrayTilerBuilder':
        self._space = space
        return self

    def alt_mode(self, mode: AlignMode) -> 'ArrayTilerBuilder':
        self._alt_mode = mode
        return self

    def alt_space(self, space: int) -> 'ArrayTilerBuilder':
        self._alt_space = space
        return self

    def build(self) -> ArrayTiler:
        """
        Raises:
            IncompleteBuilder: If no alignment mode was set
        """
        if self._mode is None:
            raise IncompleteBuilder('ArrayTilerBuilder', 'mode')
        return ArrayTiler(self._tiles, self._mode, self._space,
                          self._alt_mode, self._alt_space)
