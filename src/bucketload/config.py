"""Configuration loading and dot-path access."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from bucketload.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "DEFAULT_EXTENSION", "DEFAULT_INDEX_NAME"]

DEFAULT_EXTENSION = ".py"
DEFAULT_INDEX_NAME = "__index"


class Config:
    """Configuration accessor with dot-path key support.

    Recognised keys::

        autoload:
          extension: .py
          index_name: __index
          auto_start: true
          buckets:
            - prefix: "Acme\\\\"
              root: ./lib/acme
    """

    def __init__(self, data: dict[str, Any] | None = None, source: Path | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._source = source

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigNotFoundError(config_path=str(path))

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {path}") from e

        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {path}")
        return cls(parsed, source=path.resolve())

    @property
    def source(self) -> Path | None:
        """Path of the YAML file this config was read from, if any."""
        return self._source

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current
