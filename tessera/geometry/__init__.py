"""Integer geometry kernel."""

from tessera.geometry.point import INT_MAX, INT_MIN, Corner, Dims, Dir, Point, Side, snap_to_grid
from tessera.geometry.align import AlignMode, AlignRect, align_offset
from tessera.geometry.place_bbox import PlaceBbox
from tessera.geometry.rect import Bbox, BoundBox, ExpandMode, Rect, bbox_of, union_all
from tessera.geometry.shape import Element, Layer, Path, Polygon, Shape, ShapeKind
from tessera.geometry.transform import Named, Orientation, Transformation
