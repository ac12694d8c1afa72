"""
Configuration loading and management.

This module loads YAML configuration files for building a converter
registry. The keys it recognises are:

.. code-block:: yaml

    registry:
      pass_through: true           # register the built-in pass-through creator
      invalidate_on_register: false
      verify_results: false        # type-check every conversion result
      include_builtins: true       # load the shipped converter catalog
      include_entry_points: true   # load plugins from the omzetter.loaders group
      loaders:                     # extra loader modules, by dotted path
        - my_app.converters
    logging:
      level: INFO
"""

from typing import Any, Dict, Optional, Union
import logging
import yaml
import os

from .core.errors import ConfigError

# The `registry.*` keys and their defaults. `loaders` is a list of dotted
# module paths; every other key is a boolean.
REGISTRY_DEFAULTS: Dict[str, Any] = {
    "pass_through": True,
    "invalidate_on_register": False,
    "verify_results": False,
    "include_builtins": True,
    "include_entry_points": True,
    "loaders": [],
}


class Config:
    """
    A wrapper around a dictionary for managing configuration.

    It provides a `get` method that allows accessing nested values using
    dot-notation (e.g., 'registry.loaders').
    """

    def __init__(self, config_data: Optional[Dict[str, Any]]):
        self._config = config_data or {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Access a config value using dot notation.

        Example:
            >>> config = Config({'registry': {'verify_results': True}})
            >>> config.get('registry.verify_results')
            True
            >>> config.get('registry.loaders', [])
            []

        :param key: The dot-separated key for the desired value.
        :param default: The value to return if the key is not found.
        :return: The configuration value or the default.
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def registry_options(self) -> Dict[str, Any]:
        """
        Returns the `registry.*` settings merged over `REGISTRY_DEFAULTS`.

        :return: A dict with one entry per key in `REGISTRY_DEFAULTS`.
        :raises ConfigError: If the section has an unknown key or a value of
            the wrong type.
        """
        section = self.get("registry")
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ConfigError(f"'registry' must be a mapping, got {section!r}")

        unknown = sorted(set(section) - set(REGISTRY_DEFAULTS))
        if unknown:
            raise ConfigError(f"Unknown registry option(s): {', '.join(unknown)}")

        options = dict(REGISTRY_DEFAULTS, loaders=list(REGISTRY_DEFAULTS["loaders"]))
        for key, value in section.items():
            if value is None:
                continue
            if key == "loaders":
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"registry.loaders must be a list of module paths, got {value!r}")
                options[key] = list(value)
            elif isinstance(value, bool):
                options[key] = value
            else:
                raise ConfigError(f"registry.{key} must be true or false, got {value!r}")
        return options

    def log_level(self) -> Optional[int]:
        """
        Returns `logging.level` as a stdlib level number, or None if unset.

        :raises ConfigError: If the value is not a known level name or number.
        """
        value: Union[int, str, None] = self.get("logging.level")
        if value is None:
            return None
        if isinstance(value, bool):
            raise ConfigError(f"logging.level must be a level name, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            level = logging.getLevelName(value.upper())
            if isinstance(level, int):
                return level
        raise ConfigError(f"Unknown logging.level {value!r}")

    def __repr__(self) -> str:
        return f"Config(config_data={self._config})"


def load_config(path: Optional[str]) -> Config:
    """
    Loads a YAML configuration file from the given path.

    If the path is None or does not exist, it returns an empty Config object.

    :param path: The path to the YAML configuration file.
    :return: A Config object with the loaded data.
    """
    if not path or not os.path.exists(path):
        return Config({})

    with open(path, "r") as f:
        config_data = yaml.safe_load(f)

    return Config(config_data)
