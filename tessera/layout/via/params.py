"""
Via request parameters.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tessera.errors import IncompleteBuilder
from tessera.geometry.point import Dir
from tessera.geometry.rect import Rect
from tessera.geometry.shape import Layer


class ViaExpansion(Enum):
    """How far a via array may grow beyond the overlap of its two metals."""
    NONE = 'none'                          # never; fail if no via fits
    MINIMUM = 'minimum'                    # up to a single via
    LONGER_DIRECTION = 'longer_direction'  # single via across, array along the fitting axis


@dataclass(frozen=True)
class ViaSelector:
    """Selects a via type by name or by the layers it connects."""
    name: Optional[str] = None
    bot: Optional[Layer] = None
    top: Optional[Layer] = None

    @classmethod
    def by_name(cls, name: str) -> 'ViaSelector':
        return cls(name=name)

    @classmethod
    def by_layers(cls, bot: Layer, top: Layer) -> 'ViaSelector':
        return cls(bot=bot, top=top)

    def __str__(self):
        if self.name is not None:
            return self.name
        return f"{self.bot}->{self.top}"


@dataclass(frozen=True)
class ViaParams:
    """
    A via request.

    Attributes:
        selector: Which via to draw
        bot: Target rectangle on the lower layer
        top: Target rectangle on the upper layer
        expand: Expansion policy
        bot_extension: Direction in which the lower metal takes its longer
            extension, or None to let the generator choose
        top_extension: Same for the upper metal
    """
    selector: ViaSelector
    bot: Rect
    top: Rect
    expand: ViaExpansion = ViaExpansion.MINIMUM
    bot_extension: Optional[Dir] = None
    top_extension: Optional[Dir] = None

    @staticmethod
    def builder() -> 'ViaParamsBuilder':
        return ViaParamsBuilder()


class ViaParamsBuilder:
    """Incremental construction of :class:`ViaParams`."""

    def __init__(self):
        self._selector: Optional[ViaSelector] = None
        self._bot: Optional[Rect] = None
        self._top: Optional[Rect] = None
        self._expand = ViaExpansion.MINIMUM
        self._bot_extension: Optional[Dir] = None
        self._top_extension: Optional[Dir] = None

    def layers(self, bot: Layer, top: Layer) -> 'ViaParamsBuilder':
        self._selector = ViaSelector.by_layers(bot, top)
        return self

    def name(self, name: str) -> 'ViaParamsBuilder':
        self._selector = ViaSelector.by_name(name)
        return self

    def geometry(self, bot: Rect, top: Rect) -> 'ViaParamsBuilder':
        self._bot, self._top = bot, top
        return self

    def expand(self, expand: ViaExpansion) -> 'ViaParamsBuilder':
        self._expand = expand
        return self

    def bot_extension(self, dir: Dir) -> 'ViaParamsBuilder':
        self._bot_extension = dir
        return self

    def top_extension(self, dir: Dir) -> 'ViaParamsBuilder':
        self._top_extension = dir
        return self

    def build(self) -> ViaParams:
        """
        Raises:
            IncompleteBuilder: If the selector or geometry was not set
        """
        if self._selector is None:
            raise IncompleteBuilder('ViaParamsBuilder', 'selector')
        if self._bot is None or self._top is None:
            raise IncompleteBuilder('ViaParamsBuilder', 'geometry')
        return ViaParams(self._selector, self._bot, self._top, self._expand,
                         self._bot_extension, self._top_extension)
