"""Exception definitions module."""

from android_selfcheck.core.exceptions.errors import (
    ConfigurationError,
    ExternalCheckFailedError,
    InvalidArgumentError,
    MissingDependencyError,
    SelfCheckError,
    ToolNotExecutableError,
)

__all__ = [
    "SelfCheckError",
    "InvalidArgumentError",
    "MissingDependencyError",
    "ToolNotExecutableError",
    "ExternalCheckFailedError",
    "ConfigurationError",
]
