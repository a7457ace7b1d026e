"""
Tessera - procedural layout composition.

Integer geometry, alignment, tiling (array, grid, nine-patch), via array
generation and power-strap stitching.
"""

from tessera.logging import logger, set_log_level
from tessera.errors import (
    EmptyGeometry, IncompleteBuilder, InconsistentGridDimensions, LayoutError,
    NoViaFit, PortConflict, UnsupportedViaLayerPair,
)
from tessera.config import Config, DesignRules
from tessera.geometry import (
    AlignMode, Bbox, Corner, Dims, Dir, Element, ExpandMode, Layer, Named,
    Orientation, Path, Point, Polygon, Rect, Side, Transformation, snap_to_grid,
)
from tessera.layout.port import CellPort, PortConflictStrategy, PortId, PortMap
from tessera.layout.group import Group, Instance
from tessera.layout.placement.tile import LayerBbox, Pad, RectBbox, RelativeRectBbox, Tile, TileKind
from tessera.layout.placement.array import ArrayTiler, ArrayTilerBuilder
from tessera.layout.placement.grid import GridTiler
from tessera.layout.placement.nine_patch import NpTiler, NpTilerBuilder, Region
from tessera.layout.via import (
    MaxViaArray, ViaArrayDims, ViaExpansion, ViaParams, ViaParamsBuilder, ViaSelector,
)
from tessera.layout.routing.straps import (
    PlacedStraps, RoutedStraps, Segment, SegmentTable, Strap, SupplyNet, Target, net_from_idx,
)
from tessera.layout.connectivity import check_shorts
from tessera.pdk import Pdk, ViaRule, sky130

__version__ = '0.1.0'
