"""Toolchain availability and override consistency checks.

This module provides:
- Probing of PATH and the installed Rust targets
- Mode-specific validation of the linker chain
- Fixup suggestions for the resolved mode
"""

import os
import shutil
import subprocess
from pathlib import Path

from android_selfcheck.checks import remediation
from android_selfcheck.core.exceptions.errors import (
    MissingDependencyError,
    ToolNotExecutableError,
)
from android_selfcheck.core.logger.logger import get_logger
from android_selfcheck.models.findings import FindingLog
from android_selfcheck.models.report import LinkerChain
from android_selfcheck.models.target import (
    FALLBACK_LINKER,
    EnvironmentClass,
    TargetTriple,
    ValidationMode,
)

logger = get_logger(__name__)

TOOLCHAIN_MANAGER = "rustup"
BUILD_DRIVER = "cargo"


class ToolProbe:
    """Looks up commands on PATH and queries rustup."""

    def command_exists(self, name: str) -> bool:
        return shutil.which(name) is not None

    def is_executable_tool(self, tool: str) -> bool:
        """Check a bare command name on PATH, or a path-like name on disk."""
        if "/" in tool or os.sep in tool:
            path = Path(tool)
            return path.is_file() and os.access(path, os.X_OK)
        return self.command_exists(tool)

    def installed_targets(self) -> set[str]:
        """Return the targets reported by ``rustup target list --installed``."""
        try:
            result = subprocess.run(
                [TOOLCHAIN_MANAGER, "target", "list", "--installed"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug(f"rustup target query failed: {e}")
            return set()

        if result.returncode != 0:
            logger.debug(f"rustup target query exited with {result.returncode}")
            return set()
        return {line.strip() for line in result.stdout.splitlines() if line.strip()}


class PreflightChecker:
    """Validates the toolchain and linker chain for a resolved mode.

    Warnings and suggestions are appended to the run's FindingLog. Only
    missing base tooling, or a missing compiler/linker while building
    natively inside Termux, raise.
    """

    def __init__(
        self,
        probe: ToolProbe | None = None,
        ndk_host_tag: str = "linux-x86_64",
    ) -> None:
        """Initialize the checker.

        Args:
            probe: Tool lookup strategy.
            ndk_host_tag: Prebuilt host directory used in NDK templates.
        """
        self.probe = probe or ToolProbe()
        self.ndk_host_tag = ndk_host_tag

    def check_dependencies(self, target: TargetTriple) -> None:
        """Require rustup, cargo and the target's standard library.

        Raises:
            MissingDependencyError: If any of them is missing.
        """
        for tool in (TOOLCHAIN_MANAGER, BUILD_DRIVER):
            if not self.probe.command_exists(tool):
                raise MissingDependencyError(f"{tool} is not installed", dependency=tool)

        if target.value not in self.probe.installed_targets():
            hint = remediation.install_target(target)
            raise MissingDependencyError(
                f"Rust target '{target.value}' is not installed. Run: {hint}",
                dependency=target.value,
                hint=hint,
            )

    def run(
        self,
        target: TargetTriple,
        mode: ValidationMode,
        environment: EnvironmentClass,
        chain: LinkerChain,
        findings: FindingLog,
        diagnose_only: bool = False,
    ) -> None:
        """Run the configuration checks for a concrete mode.

        Args:
            target: Validated target triple.
            mode: Resolved validation mode.
            environment: Detected execution environment.
            chain: Resolved linker chain.
            findings: Finding buffers of the current run.
            diagnose_only: True when only an existing log is diagnosed.

        Raises:
            ToolNotExecutableError: Native build inside Termux without a usable
                compiler or linker. Log-only diagnosis never raises this; a
                missing compiler or linker is recorded as a warning instead.
        """
        if not mode.is_concrete:
            raise ValueError("validation mode must be resolved before preflight")

        strict = (
            mode is ValidationMode.NATIVE_IN_PLACE
            and environment is EnvironmentClass.TERMUX
            and not diagnose_only
        )

        if not chain.config_linker:
            findings.warn(f"no linker configured for {target.value} in the cargo config")

        if mode is ValidationMode.NATIVE_IN_PLACE:
            self._check_native(target, chain, findings, strict)
        else:
            self._check_cross(target, chain, findings)

        self._check_effective_linker(mode, environment, chain, findings, strict)

    def _check_native(
        self,
        target: TargetTriple,
        chain: LinkerChain,
        findings: FindingLog,
        strict: bool,
    ) -> None:
        if not self.probe.command_exists(FALLBACK_LINKER):
            if strict:
                raise ToolNotExecutableError(
                    f"{FALLBACK_LINKER} is required in Termux. "
                    f"Run: {remediation.TERMUX_COMPILER_INSTALL}",
                    tool=FALLBACK_LINKER,
                )
            findings.warn(
                f"{FALLBACK_LINKER} is not available on this host; "
                "native-in-place checks are partial"
            )

        if chain.config_linker and chain.config_linker != FALLBACK_LINKER:
            findings.warn(
                f'native build should use linker = "{FALLBACK_LINKER}" for {target.value} '
                f"(configured '{chain.config_linker}')"
            )

        overrides = (
            (target.cargo_linker_var, chain.cargo_linker_override),
            (target.cc_linker_var, chain.cc_linker_override),
        )
        for var, value in overrides:
            if value and value != FALLBACK_LINKER:
                findings.warn(f"native build usually should unset {var} (currently '{value}')")

        findings.suggest(
            remediation.header("suggested fixups", ValidationMode.NATIVE_IN_PLACE),
            *remediation.unset_overrides(target),
            remediation.verify_compiler(),
        )

    def _check_cross(
        self,
        target: TargetTriple,
        chain: LinkerChain,
        findings: FindingLog,
    ) -> None:
        mode = ValidationMode.CROSS_FROM_HOST

        if chain.cargo_linker_override:
            if not chain.cc_linker_override:
                findings.warn(
                    "cross-build may still fail in cc-rs crates; consider setting "
                    f"{target.cc_linker_var}={chain.cargo_linker_override}"
                )
            findings.suggest(
                remediation.header("suggested fixup", mode),
                remediation.command(
                    f'export {target.cc_linker_var}="{chain.cargo_linker_override}"'
                ),
            )
            return

        findings.warn(
            f"cross-from-host mode expects {target.cargo_linker_var} "
            "to point to an NDK clang wrapper"
        )
        findings.suggest(
            remediation.header("suggested fixup template", mode),
            remediation.ndk_toolchain_export(self.ndk_host_tag),
            *remediation.export_wrapper_overrides(target),
        )

    def _check_effective_linker(
        self,
        mode: ValidationMode,
        environment: EnvironmentClass,
        chain: LinkerChain,
        findings: FindingLog,
        strict: bool,
    ) -> None:
        linker = chain.effective_linker
        if self.probe.is_executable_tool(linker):
            return

        if strict:
            raise ToolNotExecutableError(
                f"effective linker '{linker}' is not executable in PATH",
                tool=linker,
            )
        if mode is ValidationMode.NATIVE_IN_PLACE:
            where = "Termux" if environment is EnvironmentClass.TERMUX else "non-Termux"
            findings.warn(f"effective linker '{linker}' not executable on this {where} host")
        else:
            findings.warn(
                f"effective linker '{linker}' not found "
                "(expected for some desktop hosts without NDK toolchain)"
            )
