"""Pattern-based diagnosis of Android build failure logs.

This module provides:
- A versioned table of known failure signatures
- Mode-aware recovery commands for each failure class
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from android_selfcheck.checks import remediation
from android_selfcheck.core.exceptions.errors import InvalidArgumentError
from android_selfcheck.core.logger.logger import get_logger
from android_selfcheck.models.findings import FindingLog
from android_selfcheck.models.target import (
    FALLBACK_LINKER,
    TargetTriple,
    ValidationMode,
)

logger = get_logger(__name__)

RULES_VERSION = "1"


@dataclass(frozen=True)
class DiagnosticContext:
    """Inputs available to a rule while building its suggestions."""

    target: TargetTriple
    mode: ValidationMode
    ndk_host_tag: str = "linux-x86_64"


@dataclass(frozen=True)
class DiagnosticRule:
    """One known failure class.

    Attributes:
        name: Stable identifier of the failure class.
        patterns: Regular expressions; any match triggers the rule. ``{target}``
            is replaced with the escaped target triple.
        detection: Note recorded when the rule matches.
        suggestions: Builds the ordered recovery commands, or None when no
            command is safe to generate.
    """

    name: str
    patterns: tuple[str, ...]
    detection: str
    suggestions: Callable[[DiagnosticContext], list[str]] | None = field(default=None)

    def matches(self, text: str, target: TargetTriple) -> bool:
        escaped = re.escape(target.value)
        return any(
            re.search(pattern.replace("{target}", escaped), text)
            for pattern in self.patterns
        )


def _compiler_lookup_recovery(ctx: DiagnosticContext) -> list[str]:
    if ctx.mode is ValidationMode.NATIVE_IN_PLACE:
        return [
            remediation.header("suggested recovery", ctx.mode),
            *remediation.unset_overrides(ctx.target),
            remediation.command(remediation.TERMUX_COMPILER_INSTALL),
            remediation.verify_compiler(),
        ]
    return [
        remediation.header("suggested recovery", ctx.mode),
        remediation.ndk_toolchain_export(ctx.ndk_host_tag),
        *remediation.export_wrapper_overrides(ctx.target),
        remediation.command(f'command -v "{remediation.wrapper_path(ctx.target)}"'),
    ]


def _linker_recovery(ctx: DiagnosticContext) -> list[str]:
    if ctx.mode is ValidationMode.NATIVE_IN_PLACE:
        return [
            remediation.header("suggested recovery", ctx.mode),
            remediation.command(remediation.TERMUX_COMPILER_INSTALL),
            remediation.verify_compiler(),
        ]
    return [
        remediation.header("suggested recovery", ctx.mode),
        *remediation.export_wrapper_overrides(ctx.target),
    ]


def _stdlib_recovery(ctx: DiagnosticContext) -> list[str]:
    return [
        remediation.header("suggested recovery"),
        remediation.command(remediation.install_target(ctx.target)),
    ]


# Known Android toolchain failures, evaluated in order and independently
DIAGNOSTIC_RULES: tuple[DiagnosticRule, ...] = (
    DiagnosticRule(
        name="compiler_lookup",
        patterns=tuple(
            re.escape(f'failed to find tool "{t.compiler_lookup_name}"') for t in TargetTriple
        )
        + (r"ToolNotFound",),
        detection="detected cc-rs compiler lookup failure for Android target",
        suggestions=_compiler_lookup_recovery,
    ),
    DiagnosticRule(
        name="linker_not_found",
        patterns=(
            re.escape(f"linker `{FALLBACK_LINKER}` not found"),
            r"linker .* not found",
            r"cannot find linker",
            re.escape(f'failed to find tool "{FALLBACK_LINKER}"'),
        ),
        detection="detected linker resolution failure",
        suggestions=_linker_recovery,
    ),
    DiagnosticRule(
        name="missing_target_stdlib",
        patterns=(
            r"target '{target}' not found",
            r"can't find crate for `?std`?",
            r"did you mean to run rustup target add",
        ),
        detection="detected missing Rust target stdlib",
        suggestions=_stdlib_recovery,
    ),
    DiagnosticRule(
        name="missing_executable",
        patterns=(re.escape("No such file or directory (os error 2)"),),
        detection=(
            "detected missing binary/file in build chain; verify linker and "
            "CC_* variables point to real executables"
        ),
    ),
)


class BuildDiagnostician:
    """Diagnoses captured build failure logs against the rule table."""

    def __init__(
        self,
        rules: tuple[DiagnosticRule, ...] = DIAGNOSTIC_RULES,
        ndk_host_tag: str = "linux-x86_64",
    ) -> None:
        """Initialize the diagnostician.

        Args:
            rules: Ordered rule table.
            ndk_host_tag: Prebuilt host directory used in NDK templates.
        """
        self.rules = rules
        self.ndk_host_tag = ndk_host_tag

    def diagnose_text(
        self,
        text: str,
        target: TargetTriple,
        mode: ValidationMode,
        findings: FindingLog,
    ) -> list[str]:
        """Apply every rule to ``text``.

        Returns:
            Names of the rules that matched, in table order.
        """
        ctx = DiagnosticContext(target=target, mode=mode, ndk_host_tag=self.ndk_host_tag)
        matched: list[str] = []

        for rule in self.rules:
            if not rule.matches(text, target):
                continue
            matched.append(rule.name)
            findings.detect(rule.detection)
            if rule.suggestions is not None:
                findings.suggest(*rule.suggestions(ctx))

        return matched

    def diagnose(
        self,
        log_path: Path,
        target: TargetTriple,
        mode: ValidationMode,
        findings: FindingLog,
    ) -> list[str]:
        """Diagnose a build log file.

        Raises:
            InvalidArgumentError: If the log file does not exist.
        """
        log_path = Path(log_path)
        if not log_path.is_file():
            raise InvalidArgumentError(
                f"diagnose log file does not exist: {log_path}",
                argument="--diagnose-log",
                value=str(log_path),
            )

        logger.info(f"analyzing build log for common Android toolchain issues: {log_path}")
        text = log_path.read_text(encoding="utf-8", errors="replace")
        matched = self.diagnose_text(text, target, mode, findings)

        if matched:
            logger.info(f"Build diagnosis: {', '.join(matched)}")
        else:
            logger.info("no known Android toolchain failure signature found")
        return matched


def diagnose_build_log(
    log_path: Path,
    target: TargetTriple,
    mode: ValidationMode,
    findings: FindingLog | None = None,
) -> FindingLog:
    """Convenience function to diagnose a build log into a fresh FindingLog."""
    findings = findings if findings is not None else FindingLog()
    BuildDiagnostician().diagnose(log_path, target, mode, findings)
    return findings
