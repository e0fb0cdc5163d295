"""YAML settings file loading."""

from pathlib import Path
from typing import Any

import yaml

from android_selfcheck.core.exceptions.errors import ConfigurationError


class ConfigLoader:
    """Reads a YAML settings file made of top-level sections."""

    def __init__(self, config_path: Path) -> None:
        self.config_path = Path(config_path)
        self._sections: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        """Parse the settings file.

        An empty file is an empty mapping.

        Raises:
            ConfigurationError: If the file is missing, is not valid YAML, or
                does not hold a mapping at the top level.
        """
        path = self.config_path
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Settings file not found: {path}", config_key=str(path)
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read settings file: {path}",
                config_key=str(path),
                details={"error": str(e)},
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in settings file: {path}",
                config_key=str(path),
                details={"error": str(e)},
            ) from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Settings file must contain a mapping: {path}",
                config_key=str(path),
            )
        self._sections = loaded
        return loaded

    def get_section(self, section: str) -> dict[str, Any]:
        """Return one section; absent or non-mapping sections are empty."""
        value = self._sections.get(section)
        return value if isinstance(value, dict) else {}
