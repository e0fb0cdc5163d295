"""Android source-build checks.

This module provides:
- Target/mode validation and environment detection
- Linker override resolution and preflight checks
- Build log diagnosis and the optional build check
- Report serialization
"""

from android_selfcheck.checks.diagnostic import (
    DIAGNOSTIC_RULES,
    RULES_VERSION,
    BuildDiagnostician,
    DiagnosticRule,
    diagnose_build_log,
)
from android_selfcheck.checks.environment import detect_environment, resolve_mode
from android_selfcheck.checks.overrides import OverrideResolver
from android_selfcheck.checks.preflight import PreflightChecker, ToolProbe
from android_selfcheck.checks.report import render_report, write_report
from android_selfcheck.checks.runner import CheckResult, CheckRunner, default_check_command
from android_selfcheck.checks.selfcheck import SelfCheck, SelfCheckOptions
from android_selfcheck.checks.validator import validate_invocation, validate_mode, validate_target

__all__ = [
    "BuildDiagnostician",
    "CheckResult",
    "CheckRunner",
    "DIAGNOSTIC_RULES",
    "DiagnosticRule",
    "OverrideResolver",
    "PreflightChecker",
    "RULES_VERSION",
    "SelfCheck",
    "SelfCheckOptions",
    "ToolProbe",
    "default_check_command",
    "detect_environment",
    "diagnose_build_log",
    "render_report",
    "resolve_mode",
    "validate_invocation",
    "validate_mode",
    "validate_target",
    "write_report",
]
