"""
Error taxonomy for layout composition.

Every error raised by tessera derives from :class:`LayoutError`. Errors
describing bad argument values also derive from ``ValueError``.
"""


class LayoutError(Exception):
    """Base class for all layout composition errors."""


class EmptyGeometry(LayoutError, ValueError):
    """An operation needed a non-empty bounding box but got an empty one."""


class InconsistentGridDimensions(LayoutError, ValueError):
    """Tiles in one grid row (column) report different heights (widths)."""


class IncompleteBuilder(LayoutError):
    """A required builder field was never set."""

    def __init__(self, builder: str, field: str):
        self.builder = builder
        self.field = field
        super().__init__(f"{builder}: required field '{field}' was not set")


class UnsupportedViaLayerPair(LayoutError, LookupError):
    """No via rule exists for the requested layers or via name."""


class NoViaFit(LayoutError):
    """The via array cannot satisfy the expansion policy in the given geometry."""


class PortConflict(LayoutError):
    """Two ports share an identifier under a strategy that forbids it."""

    def __init__(self, port_id):
        self.port_id = port_id
        super().__init__(f"Port '{port_id}' already exists")
