"""Execution environment detection and mode resolution."""

import os
from collections.abc import Mapping

from android_selfcheck.models.target import EnvironmentClass, ValidationMode

TERMUX_VERSION_VAR = "TERMUX_VERSION"
TERMUX_PREFIX_MARKER = "/com.termux/files/usr"


def detect_environment(environ: Mapping[str, str] | None = None) -> EnvironmentClass:
    """Classify the host as Termux or a general-purpose machine.

    Termux is recognised by a non-empty TERMUX_VERSION or a PREFIX
    inside the Termux application directory.
    """
    if environ is None:
        environ = os.environ
    if environ.get(TERMUX_VERSION_VAR):
        return EnvironmentClass.TERMUX
    if TERMUX_PREFIX_MARKER in environ.get("PREFIX", ""):
        return EnvironmentClass.TERMUX
    return EnvironmentClass.NON_TERMUX


def resolve_mode(requested: ValidationMode, environment: EnvironmentClass) -> ValidationMode:
    """Resolve ``auto`` to a concrete mode; explicit modes pass through."""
    if requested.is_concrete:
        return requested
    if environment is EnvironmentClass.TERMUX:
        return ValidationMode.NATIVE_IN_PLACE
    return ValidationMode.CROSS_FROM_HOST
