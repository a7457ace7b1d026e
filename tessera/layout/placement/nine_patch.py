"""
NpTiler - nine-patch template composition.

Corners appear once, edges repeat along their free axis and the center
fills the interior. Patch coordinates have ``y`` increasing upward; the
derived grid lists the top row first.
"""

from enum import Enum
from typing import Dict, List, Optional

from tessera.errors import IncompleteBuilder
from tessera.geometry.rect import Bbox, BoundBox
from tessera.layout.group import Group
from tessera.layout.placement.grid import GridTiler
from tessera.layout.placement.tile import Tile, as_tile
from tessera.layout.port import PortConflictStrategy, PortMapFn


class Region(Enum):
    CORNER_UL = 'corner_ul'
    CORNER_UR = 'corner_ur'
    CORNER_LR = 'corner_lr'
    CORNER_LL = 'corner_ll'
    TOP = 'top'
    BOTTOM = 'bottom'
    LEFT = 'left'
    RIGHT = 'right'
    CENTER = 'center'


class NpTiler(BoundBox):
    """
    Nine-patch tiler.

    Args:
        tiles: Tile per region; missing regions leave holes
        nx: Number of interior columns
        ny: Number of interior rows
    """

    def __init__(self, tiles: Dict[Region, object], nx: int, ny: int):
        if nx < 0 or ny < 0:
            raise ValueError(f"nx and ny must be non-negative, got nx={nx}, ny={ny}")
        self.tiles: Dict[Region, Tile] = {r: as_tile(t) for r, t in tiles.items()
                                          if t is not None}
        self.nx = nx
        self.ny = ny

    @staticmethod
    def builder() -> 'NpTilerBuilder':
        return NpTilerBuilder()

    def __repr__(self):
        return f"NpTiler(nx={self.nx}, ny={self.ny}, regions={[r.name for r in self.tiles]})"

    def patch(self, x: int, y: int) -> Region:
        """Region covering patch coordinate ``(x, y)``, with ``(0, 0)`` at the lower left."""
        nx, ny = self.nx, self.ny
        if not (0 <= x <= nx + 1 and 0 <= y <= ny + 1):
            raise ValueError(f"Patch ({x}, {y}) outside [0, {nx + 1}] x [0, {ny + 1}]")
        left, right = x == 0, x == nx + 1
        bottom, top = y == 0, y == ny + 1
        if left and bottom:
            return Region.CORNER_LL
        if left and top:
            return Region.CORNER_UL
        if right and bottom:
            return Region.CORNER_LR
        if right and top:
            return Region.CORNER_UR
        if left:
            return Region.LEFT
        if right:
            return Region.RIGHT
        if bottom:
            return Region.BOTTOM
        if top:
            return Region.TOP
        return Region.CENTER

    def grid(self) -> List[List[Optional[Tile]]]:
        """``(ny + 2) x (nx + 2)`` matrix of shared tile handles, top row first."""
        rows = self.ny + 2
        grid: List[List[Optional[Tile]]] = [[None] * (self.nx + 2) for _ in range(rows)]
        for y in range(rows):
            for x in range(self.nx + 2):
                tile = self.tiles.get(self.patch(x, y))
                grid[rows - 1 - y][x] = None if tile is None else tile.clone()
        return grid

    def into_grid_tiler(self, port_map_fn: Optional[PortMapFn] = None,
                        strategy: PortConflictStrategy = PortConflictStrategy.ERROR) -> GridTiler:
        """Expand into a GridTiler, exposing ports if ``port_map_fn`` is given."""
        if port_map_fn is None:
            return GridTiler(self.grid())
        return GridTiler.new_with_ports(self.grid(), port_map_fn, strategy)

    def bbox(self) -> Bbox:
        return self.into_grid_tiler().bbox()

    def generate(self) -> Group:
        return self.into_grid_tiler().generate()

    def draw_ref(self) -> Group:
        return self.generate()


class NpTilerBuilder:
    """Accumulates region tiles and repeat counts for an :class:`NpTiler`."""

    def __init__(self):
        self._tiles: Dict[Region, object] = {}
        self._nx: Optional[int] = None
        self._ny: Optional[int] = None

    def set(self, region: Region, tile) -> 'NpTilerBuilder':
        self._tiles[region] = tile
        return self

    def nx(self, nx: int) -> 'NpTilerBuilder':
        self._nx = nx
        return self

    def ny(self, ny: int) -> 'NpTilerBuilder':
        self._ny = ny
        return self

    def build(self) -> NpTiler:
        """
        Raises:
            IncompleteBuilder: If nx or ny was not set
        """
        if self._nx is None:
            raise IncompleteBuilder('NpTilerBuilder', 'nx')
        if self._ny is None:
            raise IncompleteBuilder('NpTilerBuilder', 'ny')
        return NpTiler(self._tiles, self._nx, self._ny)
