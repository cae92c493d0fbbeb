"""Configuration loading for the CLI.

Settings are read from these sources, later ones overriding earlier ones:

1. ``$XDG_CONFIG_HOME/citekey/config.yaml``
2. ``.citekey.yaml`` in the working directory
3. a file given with ``--config``
4. ``CITEKEY_PATTERN`` and ``CITEKEY_KEY_SUFFIX``
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

PROJECT_CONFIG = ".citekey.yaml"

# Environment variable -> preference name
ENVIRONMENT_OVERRIDES = {
    "CITEKEY_PATTERN": "default_pattern",
    "CITEKEY_KEY_SUFFIX": "key_suffix",
}


class Config:
    """YAML configuration files."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load one YAML configuration file.

        Raises:
            ValueError: If the file cannot be read, is not valid YAML or
                does not hold a mapping.
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}") from e
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """User and project config locations, lowest precedence first."""
        config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
        return [Path(config_home) / "citekey" / "config.yaml", Path(PROJECT_CONFIG)]


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load the merged configuration.

    Broken files at the default locations are skipped with a warning; a
    broken explicit file raises ValueError.
    """
    config: dict[str, Any] = {}

    for default_path in Config.get_config_paths():
        if not default_path.is_file():
            continue
        try:
            config = _deep_merge(config, Config.from_file(default_path))
        except ValueError as e:
            logger.warning(f"Skipping config file {default_path}: {e}")

    if path is not None:
        config = _deep_merge(config, Config.from_file(path))

    for variable, name in ENVIRONMENT_OVERRIDES.items():
        if value := os.environ.get(variable):
            config[name] = value

    return config


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
