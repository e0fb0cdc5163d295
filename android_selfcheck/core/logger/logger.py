"""Logging system with Rich support."""

import logging
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from android_selfcheck.core.config.settings import LoggingSettings, get_settings

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _bootstrap_settings() -> LoggingSettings:
    # Invalid ANDROID_SELFCHECK_* values are reported by the CLI, not at import
    try:
        return get_settings().logging
    except ValidationError:
        return LoggingSettings.model_construct()


def setup_logging(settings: LoggingSettings | None = None) -> None:
    """Configure the root logger.

    Log records go to stderr so that stdout carries only the check
    command's output and the run summary.

    Args:
        settings: Logging settings. Uses global settings if not provided.
    """
    if settings is None:
        settings = _bootstrap_settings()

    level = getattr(logging, settings.level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler: logging.Handler
    if settings.use_rich:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            show_time=False,
            rich_tracebacks=True,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(settings.format))
    root_logger.addHandler(handler)

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger, configuring the root logger on first use.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
