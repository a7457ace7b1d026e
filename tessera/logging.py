"""
Tessera logging configuration.

Usage:
    from tessera.logging import logger

    logger.debug('Placed 12 tiles')
    logger.warning('Port vdd[0] overwritten')

Composition is quiet at INFO except for strap summaries. Use DEBUG to
see grid sizing and via array choices:
    import tessera
    tessera.set_log_level('DEBUG')
    tessera.set_log_level('SILENT')   # nothing at all
"""

import logging

SILENT = logging.CRITICAL + 1

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
    'SILENT': SILENT,
}

logger = logging.getLogger('tessera')
logger.setLevel(logging.INFO)

# Handler is installed once, even if the module is reloaded
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))
    logger.addHandler(handler)


def set_log_level(level: str | int) -> None:
    """
    Set the tessera logging level.

    Args:
        level: 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'SILENT'
               (any case), or a numeric level

    Raises:
        ValueError: On an unknown level name
    """
    if isinstance(level, str):
        try:
            level = _LEVELS[level.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: '{level}'") from None
    logger.setLevel(level)
