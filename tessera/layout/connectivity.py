"""Short detection on composed layouts.

A group is flattened, shapes with a net on connectivity layers are
indexed per layer in a shapely STRtree, and every intersecting pair with
different nets is reported once per (layer, net pair).
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from shapely import STRtree

from tessera.geometry.shape import Element
from tessera.layout.group import Group


@dataclass
class Short:
    """Two nets touching on one layer."""
    layer: str
    net_a: str
    net_b: str
    source_a: str
    source_b: str
    bounds_a: tuple
    bounds_b: tuple

    def __str__(self):
        return (f"SHORT on {self.layer}: '{self.net_a}' ({self.source_a}) "
                f"vs '{self.net_b}' ({self.source_b}) at {self.bounds_a} / {self.bounds_b}")


@dataclass
class ShortCheckResult:
    shorts: List[Short] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.shorts

    def layers(self) -> List[str]:
        """Layers with at least one short, in detection order."""
        return list(dict.fromkeys(s.layer for s in self.shorts))

    def summary(self) -> str:
        if self.clean:
            return "No shorts detected."
        return '\n'.join([f"{len(self.shorts)} short(s) detected:"]
                         + [f"  {s}" for s in self.shorts])

    def __str__(self):
        return self.summary()

    def __repr__(self):
        return f"ShortCheckResult(shorts={len(self.shorts)})"


def _net_elements(group: Group) -> Dict[str, List[Element]]:
    by_layer: Dict[str, List[Element]] = defaultdict(list)
    for element in group.flatten():
        if element.layer.connectivity and element.net is not None:
            by_layer[element.layer.name].append(element)
    return by_layer


def check_shorts(group: Group) -> ShortCheckResult:
    """Check a group for shorts.

    Only layers with ``connectivity=True`` are checked and shapes without
    a net are skipped. Touching shapes count as connected.

    Args:
        group: Group to check; instances are flattened

    Returns:
        ShortCheckResult listing one short per layer and net pair
    """
    result = ShortCheckResult()
    seen: set = set()
    for layer, elements in _net_elements(group).items():
        geoms = [e.geometry for e in elements]
        tree = STRtree(geoms)
        left, right = tree.query(geoms, predicate='intersects')
        for i, j in sorted(zip(left.tolist(), right.tolist())):
            if j <= i:
                continue
            a, b = elements[i], elements[j]
            if a.net == b.net:
                continue
            key: Tuple[str, str, str] = (layer, *sorted((a.net, b.net)))
            if key in seen:
                continue
            seen.add(key)
            result.shorts.append(Short(layer, a.net, b.net, a.source or '?', b.source or '?',
                                       a.bounds, b.bounds))
    return result
