"""
PDK collaborator: layers, via rules, layout grid and via drawing.

Rule tables are plain data (YAML or dicts) loaded through
:class:`~tessera.config.DesignRules`. The bundled SkyWater 130nm table
is available through :func:`sky130`.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from tessera.config import DesignRules
from tessera.errors import UnsupportedViaLayerPair
from tessera.geometry.point import Dims, Dir
from tessera.geometry.shape import Layer
from tessera.layout.group import Group
from tessera.layout.via.generators import MaxViaArray, ViaArrayDims
from tessera.layout.via.params import ViaParams, ViaSelector
from tessera.logging import logger

DATA_DIR = Path(__file__).parent / 'data'


@dataclass(frozen=True)
class ViaRule:
    """
    Via between two layers.

    Attributes:
        name: Via type name, used by name selectors
        bot, top: Connected layers
        via: Cut layer
        size: Cut width and height
        space: Cut-to-cut spacing
        bot_ext, top_ext: Metal extension beyond the cuts on all sides
        bot_ext_one, top_ext_one: Extension on the longer side
        enclosure: Optional (layer, margin) drawn around the cut array
    """
    name: str
    bot: Layer
    top: Layer
    via: Layer
    size: int
    space: int
    bot_ext: int
    bot_ext_one: int
    top_ext: int
    top_ext_one: int
    enclosure: Optional[Tuple[Layer, int]] = None

    @staticmethod
    def _extension(ext: int, one: int, fixed: Optional[Dir]) -> Dims:
        if fixed is Dir.HORIZ:
            return Dims(one, ext)
        return Dims(ext, one)

    def array_dims(self, bot_fixed: Optional[Dir] = None,
                   top_fixed: Optional[Dir] = None) -> ViaArrayDims:
        """Generator constants, honoring fixed extension directions."""
        return ViaArrayDims(
            bot_extension=self._extension(self.bot_ext, self.bot_ext_one, bot_fixed),
            top_extension=self._extension(self.top_ext, self.top_ext_one, top_fixed),
            via_size=Dims.square(self.size),
            via_spacing=Dims.square(self.space),
            bot_fixed=bot_fixed is not None,
            top_fixed=top_fixed is not None,
        )


class Pdk:
    """
    Layers, via rules and grid of a process.

    Args:
        name: Process name
        layers: Layers by name
        via_rules: Available via rules
        layout_grid: Manufacturing grid (nm)
    """

    def __init__(self, name: str, layers: Dict[str, Layer],
                 via_rules: Iterable[ViaRule], layout_grid: int):
        if layout_grid <= 0:
            raise ValueError(f"layout_grid must be positive, got {layout_grid}")
        self.name = name
        self.layers = dict(layers)
        self.layout_grid = layout_grid
        self._by_name: Dict[str, ViaRule] = {}
        self._by_layers: Dict[Tuple[Layer, Layer], ViaRule] = {}
        for rule in via_rules:
            self._by_name[rule.name] = rule
            self._by_layers[(rule.bot, rule.top)] = rule

    def __repr__(self):
        return f"Pdk({self.name}, vias={sorted(self._by_name)})"

    def layer(self, name: str) -> Layer:
        try:
            return self.layers[name]
        except KeyError:
            raise KeyError(f"Pdk {self.name}: no layer '{name}'") from None

    @property
    def via_rules(self) -> List[ViaRule]:
        return list(self._by_name.values())

    def via_rule(self, bot: Layer, top: Layer) -> ViaRule:
        """
        Raises:
            UnsupportedViaLayerPair: If no rule connects ``bot`` to ``top``
        """
        try:
            return self._by_layers[(bot, top)]
        except KeyError:
            raise UnsupportedViaLayerPair(
                f"Pdk {self.name}: no via between {bot.name} and {top.name}") from None

    def resolve(self, selector: ViaSelector) -> ViaRule:
        if selector.name is not None:
            try:
                return self._by_name[selector.name]
            except KeyError:
                raise UnsupportedViaLayerPair(
                    f"Pdk {self.name}: no via named '{selector.name}'") from None
        return self.via_rule(selector.bot, selector.top)

    def via_layout(self, params: ViaParams) -> Group:
        """
        Draw the via requested by ``params``.

        Raises:
            UnsupportedViaLayerPair: If the selector matches no rule
            NoViaFit: If the expansion policy cannot be met
        """
        rule = self.resolve(params.selector)
        dims = rule.array_dims(params.bot_extension, params.top_extension)
        group = MaxViaArray(rule.via, rule.bot, rule.top, dims, params.bot, params.top,
                            params.expand, self.layout_grid).draw()
        if rule.enclosure is not None:
            layer, margin = rule.enclosure
            group.add_rect(layer, group.layer_bbox(rule.via).into_rect().expand(margin))
        return group

    @classmethod
    def from_rules(cls, rules: DesignRules) -> 'Pdk':
        """Build from a rule table with ``name``, ``layout_grid``, ``layers`` and ``vias``."""
        layers = {}
        for name, info in rules.layers.items():
            info = info if isinstance(info, DesignRules) else DesignRules()
            layers[name] = Layer(name, info.get('purpose', 'drawing'),
                                 bool(info.get('connectivity', False)))

        def lookup(via_name: str, layer_name: str) -> Layer:
            if layer_name not in layers:
                raise ValueError(f"Via '{via_name}' uses undefined layer '{layer_name}'")
            return layers[layer_name]

        vias = []
        for via_name, r in rules.vias.items():
            enclosure = None
            if 'enclosure' in r:
                enclosure = (lookup(via_name, r.enclosure.layer), r.enclosure.margin)
            vias.append(ViaRule(
                name=via_name,
                bot=lookup(via_name, r.bot), top=lookup(via_name, r.top),
                via=lookup(via_name, r.via),
                size=r.size, space=r.space,
                bot_ext=r.bot_ext, bot_ext_one=r.bot_ext_one,
                top_ext=r.top_ext, top_ext_one=r.top_ext_one,
                enclosure=enclosure,
            ))
        logger.debug(f"Loaded {len(vias)} via rules for {rules.name}")
        return cls(rules.name, layers, vias, rules.layout_grid)

    @classmethod
    def from_dict(cls, data: dict) -> 'Pdk':
        return cls.from_rules(DesignRules.from_dict(data))

    @classmethod
    def from_yaml(cls, path) -> 'Pdk':
        return cls.from_rules(DesignRules.from_yaml(path))


def load_pdk(name_or_path: str) -> Pdk:
    """Load a bundled rule table by name, or a YAML file by path."""
    bundled = DATA_DIR / f"{name_or_path}.yaml"
    if bundled.exists():
        return Pdk.from_yaml(bundled)
    path = Path(name_or_path)
    if not path.exists():
        raise FileNotFoundError(f"No bundled PDK or rule file '{name_or_path}'")
    return Pdk.from_yaml(path)


def sky130() -> Pdk:
    """The bundled SkyWater 130nm rule table."""
    return Pdk.from_yaml(DATA_DIR / 'sky130.yaml')
