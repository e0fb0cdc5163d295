"""Validation of the requested target triple and validation mode."""

from android_selfcheck.core.exceptions.errors import InvalidArgumentError
from android_selfcheck.models.target import MODE_ALIASES, TargetTriple, ValidationMode


def _expected(values: list[str]) -> str:
    if len(values) == 1:
        return values[0]
    return f"{', '.join(values[:-1])} or {values[-1]}"


def validate_target(target: str) -> TargetTriple:
    """Validate a target triple string.

    Raises:
        InvalidArgumentError: If the triple is not supported.
    """
    try:
        return TargetTriple(target)
    except ValueError:
        supported = [t.value for t in TargetTriple]
        raise InvalidArgumentError(
            f"unsupported target '{target}' (expected {_expected(supported)})",
            argument="--target",
            value=target,
        ) from None


def validate_mode(mode: str) -> ValidationMode:
    """Validate a validation mode string, accepting legacy aliases.

    Raises:
        InvalidArgumentError: If the mode is not supported.
    """
    if mode in MODE_ALIASES:
        return MODE_ALIASES[mode]
    try:
        return ValidationMode(mode)
    except ValueError:
        supported = [m.value for m in ValidationMode]
        raise InvalidArgumentError(
            f"unsupported mode '{mode}' (expected {_expected(supported)})",
            argument="--mode",
            value=mode,
        ) from None


def validate_invocation(target: str, mode: str) -> tuple[TargetTriple, ValidationMode]:
    """Validate target then mode; the first failure wins."""
    return validate_target(target), validate_mode(mode)
