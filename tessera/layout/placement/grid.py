"""
GridTiler - sparse 2-D composition.

Row 0 is the top row. Every present tile in a row must have the same
height and every present tile in a column the same width; row heights and
column widths are derived from the tiles, and holes still reserve space
established by their siblings.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from tessera.errors import InconsistentGridDimensions
from tessera.geometry.point import Point
from tessera.geometry.rect import Bbox, BoundBox, Rect
from tessera.layout.group import Group
from tessera.layout.placement.tile import Tile, as_tile
from tessera.layout.port import (
    PortConflictStrategy, PortMap, PortMapFn, identity_port_map,
)
from tessera.logging import logger


def _offsets(sizes: np.ndarray) -> np.ndarray:
    """Exclusive prefix sums: offset of each entry from the first one."""
    if len(sizes) == 0:
        return np.zeros(0, dtype=np.int64)
    return np.concatenate(([0], np.cumsum(sizes)[:-1])).astype(np.int64)


class GridTiler(BoundBox):
    """
    Tiles on a grid of rows and columns.

    Args:
        tiles: Row-major matrix (top row first) of tiles or None for holes

    Raises:
        InconsistentGridDimensions: If rows differ in length, or a tile's
            height (width) disagrees with its row (column)
    """

    def __init__(self, tiles: Sequence[Sequence[Optional[object]]]):
        self.tiles: List[List[Optional[Tile]]] = [
            [None if t is None else as_tile(t) for t in row] for row in tiles]
        self.rows = len(self.tiles)
        self.cols = len(self.tiles[0]) if self.tiles else 0
        self.ports = PortMap()

        heights: List[Optional[int]] = [None] * self.rows
        widths: List[Optional[int]] = [None] * self.cols
        for i, row in enumerate(self.tiles):
            if len(row) != self.cols:
                raise InconsistentGridDimensions(
                    f"Row {i} has {len(row)} columns, expected {self.cols}")
            for j, tile in enumerate(row):
                if tile is None:
                    continue
                dims = tile.brect().dims()
                if heights[i] is None:
                    heights[i] = dims.h
                elif heights[i] != dims.h:
                    raise InconsistentGridDimensions(
                        f"Tile ({i}, {j}) has height {dims.h}, "
                        f"but row {i} has height {heights[i]}")
                if widths[j] is None:
                    widths[j] = dims.w
                elif widths[j] != dims.w:
                    raise InconsistentGridDimensions(
                        f"Tile ({i}, {j}) has width {dims.w}, "
                        f"but column {j} has width {widths[j]}")

        self.row_heights = np.array([h or 0 for h in heights], dtype=np.int64)
        self.col_widths = np.array([w or 0 for w in widths], dtype=np.int64)
        # x grows left to right; y accumulates upward from the bottom row
        self.col_offsets = _offsets(self.col_widths)
        self.row_offsets = _offsets(self.row_heights[::-1])[::-1]
        logger.debug(f"GridTiler {self.rows}x{self.cols}: "
                     f"heights={self.row_heights.tolist()}, widths={self.col_widths.tolist()}")

    @classmethod
    def new_with_ports(cls, tiles: Sequence[Sequence[Optional[object]]],
                       port_map_fn: PortMapFn = identity_port_map,
                       strategy: PortConflictStrategy = PortConflictStrategy.ERROR) -> 'GridTiler':
        """Build the grid and expose ports in one step."""
        grid = cls(tiles)
        grid.expose_ports(port_map_fn, strategy)
        return grid

    def __repr__(self):
        return f"GridTiler({self.rows}x{self.cols})"

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def tile(self, i: int, j: int) -> Optional[Tile]:
        return self.tiles[i][j]

    def pos_ll(self, i: int, j: int) -> Point:
        """Lower-left corner of the cell at row ``i`` (from the top), column ``j``."""
        return Point(int(self.col_offsets[j]), int(self.row_offsets[i]))

    def cell(self, i: int, j: int) -> Rect:
        """Absolute rectangle reserved for row ``i``, column ``j``."""
        p0 = self.pos_ll(i, j)
        return Rect(p0, Point(p0.x + int(self.col_widths[j]), p0.y + int(self.row_heights[i])))

    def translation(self, i: int, j: int) -> Point:
        """Offset that moves tile ``(i, j)`` from its own position into its cell."""
        tile = self.tiles[i][j]
        if tile is None:
            raise LookupError(f"No tile at ({i}, {j})")
        return self.pos_ll(i, j) - tile.bbox().p0

    def present(self):
        """Iterate over ``(i, j, tile)`` for every non-empty cell."""
        for i, row in enumerate(self.tiles):
            for j, tile in enumerate(row):
                if tile is not None:
                    yield i, j, tile

    def expose_ports(self, port_map_fn: PortMapFn = identity_port_map,
                     strategy: PortConflictStrategy = PortConflictStrategy.ERROR) -> PortMap:
        """
        Add the placed ports of every tile to this grid's port map.

        Args:
            port_map_fn: Called as ``fn(port, (i, j))``; returns the port to
                expose or None to drop it
            strategy: Conflict strategy for identical port ids
        """
        for i, j, tile in self.present():
            ports = tile.ports()
            ports.translate(self.translation(i, j))
            for port in ports:
                mapped = port_map_fn(port, (i, j))
                if mapped is not None:
                    self.ports.add(mapped, strategy)
        return self.ports

    def bbox(self) -> Bbox:
        if self.rows == 0 or self.cols == 0:
            return Bbox.empty()
        return Rect(Point.zero(), Point(int(self.col_widths.sum()),
                                        int(self.row_heights.sum()))).bbox()

    def generate(self) -> Group:
        group = Group()
        for i, j, tile in self.present():
            drawn = tile.draw_ref().translate(self.translation(i, j))
            group.add_group(drawn, with_ports=False)
        group.add_ports(p.copy() for p in self.ports)
        return group

    def draw_ref(self) -> Group:
        return self.generate()
