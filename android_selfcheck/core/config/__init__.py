"""Configuration management for the Android self-check."""

from pathlib import Path
from typing import Any

# Lazy logger to avoid circular import
_logger = None


def _get_logger():
    global _logger
    if _logger is None:
        from android_selfcheck.core.logger.logger import get_logger
        _logger = get_logger(__name__)
    return _logger


def load_cargo_config(path: Path | str) -> dict[str, Any]:
    """Load a cargo configuration file.

    Missing or unreadable files yield an empty mapping; the cargo
    configuration is advisory input and never aborts a run.

    Args:
        path: Path to the cargo ``config.toml``.

    Returns:
        Parsed TOML document, or an empty dictionary.
    """
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib

    path = Path(path)
    if not path.is_file():
        _get_logger().debug(f"No cargo config at {path}")
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        _get_logger().warning(f"Failed to read cargo config {path}: {e}")
        return {}


def get_target_linker(config: dict[str, Any], triple: str) -> str | None:
    """Get the ``linker`` declared in ``[target.<triple>]``.

    Args:
        config: Parsed cargo configuration.
        triple: Target triple naming the section.

    Returns:
        The configured linker, or None if absent or not a non-empty string.
    """
    targets = config.get("target", {})
    if not isinstance(targets, dict):
        return None
    section = targets.get(triple, {})
    if not isinstance(section, dict):
        return None
    linker = section.get("linker")
    if isinstance(linker, str) and linker:
        return linker
    return None
