"""
Power-strap stitching.

Takes pre-computed router track segments, draws them as supply straps,
connects them to registered targets on the neighbouring layers and
ladders adjacent strap layers together with vias. The supply net of a
segment is a pure function of its track id parity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tessera.errors import IncompleteBuilder
from tessera.geometry.point import Point
from tessera.geometry.rect import Bbox, Rect
from tessera.geometry.shape import Layer
from tessera.layout.group import Group, Instance
from tessera.layout.via.params import ViaParams, ViaSelector
from tessera.logging import logger


class SupplyNet(Enum):
    VDD = 'vdd'
    VSS = 'vss'


def net_from_idx(track_id: int) -> SupplyNet:
    """Even tracks carry VSS, odd tracks VDD."""
    return SupplyNet.VSS if track_id % 2 == 0 else SupplyNet.VDD


def _overlaps(box: Bbox) -> bool:
    return not box.is_empty() and box.width() > 0 and box.height() > 0


@dataclass(frozen=True)
class Segment:
    """
    One router track segment.

    Attributes:
        rect: Segment geometry
        track_id: Router track index, determines the net
        lower_boundary: Segment ends at the lower routing boundary
        upper_boundary: Segment ends at the upper routing boundary
    """
    rect: Rect
    track_id: int
    lower_boundary: bool = False
    upper_boundary: bool = False

    @property
    def net(self) -> SupplyNet:
        return net_from_idx(self.track_id)


@dataclass(frozen=True)
class Strap:
    """A drawn supply strap."""
    rect: Rect
    net: SupplyNet
    lower_boundary: bool = False
    upper_boundary: bool = False
    track_id: Optional[int] = None


@dataclass
class Target:
    """A rectangle straps should connect to; ``hit`` is set once a via lands on it."""
    net: SupplyNet
    rect: Rect
    hit: bool = False


class SegmentTable:
    """
    Pre-computed router output.

    Args:
        layers: Routing layer stack, bottom first
        segments: Segments per layer
    """

    def __init__(self, layers: Sequence[Layer],
                 segments: Optional[Dict[Layer, Iterable[Segment]]] = None):
        self.layers: List[Layer] = list(layers)
        self._segments: Dict[Layer, List[Segment]] = {layer: [] for layer in self.layers}
        for layer, segs in (segments or {}).items():
            for seg in segs:
                self.add(layer, seg)

    def add(self, layer: Layer, segment: Segment) -> None:
        self.index(layer)
        self._segments[layer].append(segment)

    def segments(self, layer: Layer) -> List[Segment]:
        self.index(layer)
        return list(self._segments[layer])

    def index(self, layer: Layer) -> int:
        try:
            return self.layers.index(layer)
        except ValueError:
            raise ValueError(f"Layer {layer} is not in the routing stack") from None

    def below(self, layer: Layer) -> Optional[Layer]:
        i = self.index(layer)
        return self.layers[i - 1] if i > 0 else None

    def above(self, layer: Layer) -> Optional[Layer]:
        i = self.index(layer)
        return self.layers[i + 1] if i + 1 < len(self.layers) else None


class PlacedStraps:
    """Straps drawn by :meth:`RoutedStraps.fill`, queryable by layer."""

    def __init__(self):
        self._straps: Dict[Layer, List[Strap]] = {}

    def add(self, layer: Layer, strap: Strap) -> None:
        self._straps.setdefault(layer, []).append(strap)

    def on_layer(self, layer: Layer) -> List[Strap]:
        return list(self._straps.get(layer, []))

    def layers(self) -> List[Layer]:
        return list(self._straps)

    def __len__(self) -> int:
        return sum(len(s) for s in self._straps.values())


class RoutedStraps:
    """
    Strap stitcher.

    Example:
        straps = RoutedStraps()
        straps.set_strap_layers([met2, met3])
        straps.add_target(met1, SupplyNet.VDD, vdd_rail)
        placed = straps.fill(router, pdk, group)
        assert not straps.unhit_targets()
    """

    def __init__(self):
        self.strap_layers: List[Layer] = []
        self.targets: Dict[Layer, List[Target]] = {}

    def set_strap_layers(self, layers: Iterable[Layer]) -> 'RoutedStraps':
        self.strap_layers = list(layers)
        return self

    def add_target(self, layer: Layer, net: SupplyNet, rect: Rect) -> Target:
        target = Target(net, rect)
        self.targets.setdefault(layer, []).append(target)
        return target

    def unhit_targets(self) -> List[Tuple[Layer, Target]]:
        return [(layer, t) for layer, ts in self.targets.items() for t in ts if not t.hit]

    def _connect_targets(self, router, pdk, group: Group, layer: Layer,
                         segment: Segment) -> int:
        """Drop vias from ``segment`` onto matching targets on the neighbouring layers."""
        count = 0
        for other, other_is_below in ((router.below(layer), True), (router.above(layer), False)):
            if other is None:
                continue
            for target in self.targets.get(other, []):
                if target.net is not segment.net:
                    continue
                ov = segment.rect.intersection(target.rect)
                if not _overlaps(ov):
                    continue
                if other_is_below:
                    params = ViaParams(ViaSelector.by_layers(other, layer), target.rect, segment.rect)
                else:
                    params = ViaParams(ViaSelector.by_layers(layer, other), segment.rect, target.rect)
                via = pdk.via_layout(params)
                # only keep vias that stay inside the overlap
                if ov.union(via.bbox()) == ov:
                    group.add_group(via, with_ports=False)
                    target.hit = True
                    count += 1
        return count

    def _ladder(self, router, pdk, group: Group, bot: Layer, top: Layer) -> int:
        """Via every same-net crossing between two adjacent strap layers."""
        # cell and the snapped overlap center it was drawn on, per overlap size
        cells: Dict[Tuple[int, int], Tuple[Group, Point]] = {}
        count = 0
        for top_seg in router.segments(top):
            for bot_seg in router.segments(bot):
                if top_seg.net is not bot_seg.net:
                    continue
                ov = bot_seg.rect.intersection(top_seg.rect)
                if not _overlaps(ov):
                    continue
                ov = ov.into_rect()
                key = (ov.width(), ov.height())
                center = ov.center().snap_to_grid(pdk.layout_grid)
                if key not in cells:
                    cell = pdk.via_layout(
                        ViaParams(ViaSelector.by_layers(bot, top), bot_seg.rect, top_seg.rect))
                    cell.name = f"{bot.name}_{top.name}_via_{key[0]}x{key[1]}"
                    cells[key] = (cell, center)
                cell, anchor = cells[key]
                group.add_instance(Instance(cell, center - anchor, name=f"{cell.name}_{count}"))
                count += 1
        return count

    def fill(self, router, pdk, group: Group) -> PlacedStraps:
        """
        Draw straps and vias into ``group``.

        Args:
            router: Segment source with ``segments(layer)``, ``below(layer)``
                and ``above(layer)`` (e.g. :class:`SegmentTable`)
            pdk: Provides ``via_layout(params)`` and ``layout_grid``
            group: Output group

        Returns:
            The drawn straps by layer

        Raises:
            IncompleteBuilder: If fewer than two strap layers are set
        """
        if len(self.strap_layers) < 2:
            raise IncompleteBuilder('RoutedStraps', 'strap_layers (at least two)')

        placed = PlacedStraps()
        target_vias = 0
        for layer in self.strap_layers:
            for segment in router.segments(layer):
                group.add_rect(layer, segment.rect, net=segment.net.value)
                placed.add(layer, Strap(segment.rect, segment.net, segment.lower_boundary,
                                        segment.upper_boundary, segment.track_id))
                target_vias += self._connect_targets(router, pdk, group, layer, segment)

        ladder_vias = 0
        for bot, top in zip(self.strap_layers, self.strap_layers[1:]):
            ladder_vias += self._ladder(router, pdk, group, bot, top)

        unhit = len(self.unhit_targets())
        logger.info(f"Straps: {len(placed)} segments, {target_vias} target vias, "
                    f"{ladder_vias} ladder vias, {unhit} unhit targets")
        return placed
