"""
Configuration: rule containers and package-level settings.

``DesignRules`` stores rule constants with attribute access. ``Config``
collects the package defaults (log level, grid, via expansion, port
conflict strategy) and can be read from YAML or the environment.
"""

import json
import os
from pathlib import Path
from typing import Optional

import yaml

from tessera.logging import logger, set_log_level


class DesignRules:
    """Stores design rules with attribute access. Raises AttributeError if undefined.

    Example:
        rules = DesignRules.from_dict({'MCON': {'W': 170, 'S': 190}})
        print(rules.MCON.W)  # 170
    """

    def __init__(self):
        self._data: dict = {}

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"DesignRules: '{name}' not defined")

    def __setattr__(self, name: str, value):
        if name.startswith('_'):
            super().__setattr__(name, value)
        else:
            self._data[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self._data

    def __getitem__(self, name: str):
        return self._data[name]

    def __repr__(self):
        return f"DesignRules({list(self._data.keys())})"

    def get(self, name: str, default=None):
        return self._data.get(name, default)

    def keys(self):
        return self._data.keys()

    def items(self):
        return self._data.items()

    def to_dict(self) -> dict:
        """Convert back to plain nested dicts."""
        return {k: v.to_dict() if isinstance(v, DesignRules) else v
                for k, v in self._data.items()}

    @classmethod
    def from_dict(cls, data: dict) -> 'DesignRules':
        """Load from dict. Nested dicts become nested DesignRules."""
        rules = cls()
        for key, value in data.items():
            if isinstance(value, dict):
                setattr(rules, str(key), cls.from_dict(value))
            else:
                setattr(rules, str(key), value)
        return rules

    @classmethod
    def from_json(cls, path) -> 'DesignRules':
        """Load from JSON file."""
        with open(Path(path)) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_yaml(cls, path) -> 'DesignRules':
        """Load from YAML file."""
        with open(Path(path)) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
        return cls.from_dict(data)


class Config:
    """Package-level defaults.

    Attributes:
        log_level: Level name passed to :func:`set_log_level`
        via_expansion: Default via expansion policy name
            ('none', 'minimum', 'longer_direction')
        port_conflict_strategy: Default strategy name
            ('error', 'ignore', 'overwrite', 'merge')
        pdk: Name of the bundled PDK rule table, or a path to a YAML file
    """

    ENV_CONFIG = 'TESSERA_CONFIG'
    ENV_LOG_LEVEL = 'TESSERA_LOG_LEVEL'

    def __init__(self, log_level: str = 'INFO', via_expansion: str = 'minimum',
                 port_conflict_strategy: str = 'error',
                 pdk: str = 'sky130'):
        self.log_level = log_level
        self.via_expansion = via_expansion
        self.port_conflict_strategy = port_conflict_strategy
        self.pdk = pdk

    def __repr__(self):
        return (f"Config(log_level={self.log_level!r}, "
                f"via_expansion={self.via_expansion!r}, "
                f"port_conflict_strategy={self.port_conflict_strategy!r}, pdk={self.pdk!r})")

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        known = {'log_level', 'via_expansion', 'port_conflict_strategy', 'pdk'}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path) -> 'Config':
        """Load settings from the ``tessera`` section (or top level) of a YAML file."""
        with open(Path(path)) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
        return cls.from_dict(data.get('tessera', data))

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> 'Config':
        """Build from ``TESSERA_CONFIG`` (YAML path) and ``TESSERA_LOG_LEVEL``."""
        environ = os.environ if environ is None else environ
        path = environ.get(cls.ENV_CONFIG)
        config = cls.from_yaml(path) if path else cls()
        level = environ.get(cls.ENV_LOG_LEVEL)
        if level:
            config.log_level = level
        return config

    def apply(self) -> 'Config':
        """Apply the log level to the package logger."""
        set_log_level(self.log_level)
        logger.debug(f"Applied {self}")
        return self

    def expansion(self):
        """The configured :class:`~tessera.layout.via.ViaExpansion`."""
        from tessera.layout.via.params import ViaExpansion
        try:
            return ViaExpansion(self.via_expansion)
        except ValueError:
            raise ValueError(f"Unknown via expansion: '{self.via_expansion}'") from None

    def conflict_strategy(self):
        """The configured :class:`~tessera.layout.port.PortConflictStrategy`."""
        from tessera.layout.port import PortConflictStrategy
        try:
            return PortConflictStrategy(self.port_conflict_strategy)
        except ValueError:
            raise ValueError(
                f"Unknown port conflict strategy: '{self.port_conflict_strategy}'") from None

    def load_pdk(self):
        """Load the configured PDK rule table."""
        from tessera.pdk import load_pdk
        return load_pdk(self.pdk)
