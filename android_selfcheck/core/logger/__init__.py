"""Logging helpers."""

from android_selfcheck.core.logger.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
