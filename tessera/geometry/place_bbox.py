"""
Absolute placement by bounding-box corner or center.
"""

from tessera.errors import EmptyGeometry
from tessera.geometry.point import Corner, Point


class PlaceBbox:
    """Mixin for anything with ``bbox()`` and ``translate(p)``."""

    def _placement_bbox(self):
        box = self.bbox()
        if box.is_empty():
            raise EmptyGeometry(f"Cannot place {type(self).__name__} with an empty bounding box")
        return box

    def place(self, corner: Corner, pt: Point):
        """Translate so that ``corner`` of the bbox lands on ``pt``."""
        box = self._placement_bbox()
        x = box.p0.x if corner in (Corner.LOWER_LEFT, Corner.UPPER_LEFT) else box.p1.x
        y = box.p0.y if corner in (Corner.LOWER_LEFT, Corner.LOWER_RIGHT) else box.p1.y
        return self.translate(Point(pt.x - x, pt.y - y))

    def place_center(self, pt: Point):
        """Translate so that the bbox center lands on ``pt``.

        Raises:
            EmptyGeometry: If the bbox is empty
            ValueError: If the bbox center is not an integer point
        """
        return self.place_center_x(pt.x).place_center_y(pt.y)

    def place_center_x(self, x: int):
        box = self._placement_bbox()
        if (box.p0.x + box.p1.x) % 2 != 0:
            raise ValueError(f"Horizontal center of {box} is not on an integer coordinate")
        return self.translate(Point(x - (box.p0.x + box.p1.x) // 2, 0))

    def place_center_y(self, y: int):
        box = self._placement_bbox()
        if (box.p0.y + box.p1.y) % 2 != 0:
            raise ValueError(f"Vertical center of {box} is not on an integer coordinate")
        return self.translate(Point(0, y - (box.p0.y + box.p1.y) // 2))
