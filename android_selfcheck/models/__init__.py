"""Data models for the Android self-check."""

from android_selfcheck.models.findings import Finding, FindingKind, FindingLog
from android_selfcheck.models.report import (
    REPORT_SCHEMA_VERSION,
    LinkerChain,
    RunReport,
    RunStatus,
)
from android_selfcheck.models.target import (
    DEFAULT_TARGET,
    FALLBACK_LINKER,
    EnvironmentClass,
    TargetTriple,
    ValidationMode,
)

__all__ = [
    "DEFAULT_TARGET",
    "FALLBACK_LINKER",
    "EnvironmentClass",
    "TargetTriple",
    "ValidationMode",
    "Finding",
    "FindingKind",
    "FindingLog",
    "LinkerChain",
    "RunReport",
    "RunStatus",
    "REPORT_SCHEMA_VERSION",
]
