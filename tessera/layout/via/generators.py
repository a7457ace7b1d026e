"""
Via array generators.

A via array is ``nx x ny`` cuts of ``via_size`` separated by
``via_spacing``, enclosed by metal on the bottom and top layers that
extends beyond the cuts by the per-layer extension dims.
"""

from dataclasses import dataclass, replace
from typing import Iterator, Tuple

from tessera.errors import NoViaFit
from tessera.geometry.point import Dims, Dir, Point
from tessera.geometry.rect import Bbox, Rect
from tessera.geometry.shape import Layer
from tessera.layout.group import Group
from tessera.layout.via.params import ViaExpansion
from tessera.logging import logger


@dataclass(frozen=True)
class ViaArrayDims:
    """
    Geometry constants of one via type.

    Attributes:
        bot_extension: Bottom metal extension beyond the cuts (w, h)
        top_extension: Top metal extension beyond the cuts (w, h)
        via_size: Cut size
        via_spacing: Cut-to-cut spacing
        bot_fixed: The bottom extension direction is fixed by the caller
        top_fixed: The top extension direction is fixed by the caller
    """
    bot_extension: Dims
    top_extension: Dims
    via_size: Dims
    via_spacing: Dims
    bot_fixed: bool = False
    top_fixed: bool = False

    def array_dims(self, nx: int, ny: int) -> Dims:
        """Size of the cut array, excluding metal extension."""
        return Dims(self.via_size.w * nx + self.via_spacing.w * (nx - 1),
                    self.via_size.h * ny + self.via_spacing.h * (ny - 1))

    def _pitch(self, dir: Dir) -> int:
        return self.via_size.dim(dir) + self.via_spacing.dim(dir)

    def max_n_metal(self, dir: Dir, extension: Dims, metal: Rect) -> int:
        """Most cuts along ``dir`` that fit in ``metal`` with full extension."""
        n = (metal.length(dir) + self.via_spacing.dim(dir)
             - 2 * extension.dim(dir)) // self._pitch(dir)
        return max(n, 0)

    def max_n_ov(self, dir: Dir, ov: Rect) -> int:
        """Most cuts along ``dir`` that fit in the overlap rectangle."""
        return max((ov.length(dir) + self.via_spacing.dim(dir)) // self._pitch(dir), 0)

    def max_n(self, dir: Dir, bot: Rect, top: Rect) -> int:
        ov = bot.intersection(top)
        if ov.is_empty():
            return 0
        return min(self.max_n_metal(dir, self.bot_extension, bot),
                   self.max_n_metal(dir, self.top_extension, top),
                   self.max_n_ov(dir, ov.into_rect()))

    def max_ns(self, bot: Rect, top: Rect) -> Tuple[int, int]:
        return self.max_n(Dir.HORIZ, bot, top), self.max_n(Dir.VERT, bot, top)

    def select_ns(self, bot: Rect, top: Rect, expand: ViaExpansion) -> Tuple[int, int]:
        """
        Cut counts ``(nx, ny)`` under the expansion policy.

        Returns ``(0, 0)`` when ``expand`` is NONE and no via fits.
        """
        nx, ny = self.max_ns(bot, top)
        if nx > 0 and ny > 0:
            return nx, ny
        if expand is ViaExpansion.NONE:
            return 0, 0
        if expand is ViaExpansion.MINIMUM:
            return 1, 1
        return max(nx, 1), max(ny, 1)

    def transposed(self, bot: bool, top: bool) -> 'ViaArrayDims':
        """Copy with the bottom and/or top extension dims swapped."""
        return replace(
            self,
            bot_extension=self.bot_extension.transpose() if bot else self.bot_extension,
            top_extension=self.top_extension.transpose() if top else self.top_extension,
        )


class FixedSizeViaArray:
    """
    Draws exactly ``nx x ny`` cuts with their enclosing metals.

    The result is centered on the origin, snapped to ``grid``.
    """

    def __init__(self, via_layer: Layer, bot_layer: Layer, top_layer: Layer,
                 dims: ViaArrayDims, nx: int, ny: int, grid: int):
        if nx < 1 or ny < 1:
            raise NoViaFit(f"A via array needs at least one cut, got {nx}x{ny}")
        self.via_layer = via_layer
        self.bot_layer = bot_layer
        self.top_layer = top_layer
        self.dims = dims
        self.nx = nx
        self.ny = ny
        self.grid = grid

    def draw(self) -> Group:
        dims = self.dims
        array = Rect.from_dims(dims.array_dims(self.nx, self.ny))
        group = Group()
        group.add_rect(self.bot_layer, array.expand_dims(dims.bot_extension))
        group.add_rect(self.top_layer, array.expand_dims(dims.top_extension))

        pitch_x = dims.via_size.w + dims.via_spacing.w
        pitch_y = dims.via_size.h + dims.via_spacing.h
        cut = Rect.from_dims(dims.via_size)
        for i in range(self.nx):
            for j in range(self.ny):
                group.add_rect(self.via_layer, cut.translate(Point(i * pitch_x, j * pitch_y)))

        return group.align_centers_gridded(Bbox.zero(), self.grid)


class MaxViaArray:
    """
    Largest via array serving the overlap of ``bot`` and ``top``.

    Every allowed combination of transposed bottom and top extensions is
    tried, top outer and bottom inner; the one with the most cuts wins. On
    equal counts the least metal drawn outside the target rectangles wins,
    and exact ties go to the configuration tried last. The array is
    centered on the overlap, snapped to ``grid``.
    """

    def __init__(self, via_layer: Layer, bot_layer: Layer, top_layer: Layer,
                 dims: ViaArrayDims, bot: Rect, top: Rect,
                 expand: ViaExpansion = ViaExpansion.MINIMUM, grid: int = 1):
        self.via_layer = via_layer
        self.bot_layer = bot_layer
        self.top_layer = top_layer
        self.dims = dims
        self.bot = bot
        self.top = top
        self.expand = expand
        self.grid = grid

    def configurations(self) -> Iterator[ViaArrayDims]:
        for top_t in ((False,) if self.dims.top_fixed else (False, True)):
            for bot_t in ((False,) if self.dims.bot_fixed else (False, True)):
                yield self.dims.transposed(bot_t, top_t)

    def overshoot(self, group: Group) -> int:
        """Metal area drawn outside the target rectangles."""
        total = 0
        for layer, target in ((self.bot_layer, self.bot), (self.top_layer, self.top)):
            metal = group.layer_bbox(layer).into_rect()
            inside = metal.intersection(target)
            total += metal.area() - (0 if inside.is_empty() else inside.into_rect().area())
        return total

    def draw(self) -> Group:
        """
        Raises:
            NoViaFit: If the rectangles do not overlap, or the policy is
                NONE and not even one via fits
        """
        ov = self.bot.intersection(self.top)
        if ov.is_empty():
            raise NoViaFit(f"{self.bot} and {self.top} do not overlap")

        best, best_n, best_diff = None, 0, 0
        for dims in self.configurations():
            nx, ny = dims.select_ns(self.bot, self.top, self.expand)
            n = nx * ny
            if n == 0 or n < best_n:
                continue
            group = FixedSizeViaArray(self.via_layer, self.bot_layer, self.top_layer,
                                      dims, nx, ny, self.grid).draw()
            group.align_centers_gridded(ov, self.grid)
            diff = self.overshoot(group)
            if n > best_n or diff <= best_diff:
                best, best_n, best_diff = group, n, diff

        if best is None:
            raise NoViaFit(
                f"No {self.via_layer.name} via fits between {self.bot} and {self.top} "
                f"with expansion {self.expand.name}")
        logger.debug(f"{self.via_layer.name}: {best_n} cut(s), overshoot {best_diff}")
        return best


class MaxFixedExtensionViaArray(MaxViaArray):
    """:class:`MaxViaArray` that keeps the extension dims as given."""

    def configurations(self) -> Iterator[ViaArrayDims]:
        yield self.dims
