"""Custom exception definitions for the Android self-check."""

from typing import Any


class SelfCheckError(Exception):
    """Base exception for all fatal self-check errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidArgumentError(SelfCheckError):
    """Exception raised for unsupported or missing invocation arguments."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid argument error.

        Args:
            message: Error message.
            argument: Name of the offending option.
            value: Value that was rejected.
            details: Additional error details.
        """
        details = details or {}
        if argument:
            details["argument"] = argument
        if value is not None:
            details["value"] = value
        super().__init__(message, details)


class MissingDependencyError(SelfCheckError):
    """Exception raised when a required toolchain component is absent."""

    def __init__(
        self,
        message: str,
        dependency: str | None = None,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize missing dependency error.

        Args:
            message: Error message.
            dependency: Name of the missing command or component.
            hint: Remediation command for the operator.
            details: Additional error details.
        """
        details = details or {}
        if dependency:
            details["dependency"] = dependency
        if hint:
            details["hint"] = hint
        super().__init__(message, details)
        self.hint = hint


class ToolNotExecutableError(SelfCheckError):
    """Exception raised when a compiler or linker cannot be executed."""

    def __init__(
        self,
        message: str,
        tool: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize tool error.

        Args:
            message: Error message.
            tool: Tool name or path that could not be resolved.
            details: Additional error details.
        """
        details = details or {}
        if tool:
            details["tool"] = tool
        super().__init__(message, details)


class ExternalCheckFailedError(SelfCheckError):
    """Exception raised when the external build check exits non-zero."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        return_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize external check error.

        Args:
            message: Error message.
            command: The command that was executed.
            return_code: Exit status of the command.
            details: Additional error details.
        """
        details = details or {}
        if command:
            details["command"] = command
        if return_code is not None:
            details["return_code"] = return_code
        super().__init__(message, details)
        self.return_code = return_code


class ConfigurationError(SelfCheckError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
