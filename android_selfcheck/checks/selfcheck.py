"""Self-check pipeline.

Validates the invocation, resolves mode and linker chain, runs the
preflight checks, then either diagnoses a supplied log or optionally
runs the build check. Every run yields exactly one RunReport.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from android_selfcheck.checks.diagnostic import RULES_VERSION, BuildDiagnostician
from android_selfcheck.checks.environment import detect_environment, resolve_mode
from android_selfcheck.checks.overrides import OverrideResolver
from android_selfcheck.checks.preflight import PreflightChecker, ToolProbe
from android_selfcheck.checks.runner import CheckRunner
from android_selfcheck.checks.validator import validate_invocation
from android_selfcheck.core.config.settings import Settings, get_settings
from android_selfcheck.core.exceptions.errors import SelfCheckError
from android_selfcheck.core.logger.logger import get_logger
from android_selfcheck.models.findings import FindingLog
from android_selfcheck.models.report import LinkerChain, RunReport, RunStatus
from android_selfcheck.models.target import (
    DEFAULT_TARGET,
    EnvironmentClass,
    TargetTriple,
    ValidationMode,
)

logger = get_logger(__name__)


@dataclass
class SelfCheckOptions:
    """Invocation options as given on the command line."""

    target: str = DEFAULT_TARGET.value
    mode: str = ValidationMode.AUTO.value
    run_check: bool = False
    diagnose_log: Path | None = None
    project_root: Path = field(default_factory=Path.cwd)


@dataclass
class RunContext:
    """State accumulated by one run; fields stay None until resolved."""

    findings: FindingLog = field(default_factory=FindingLog)
    target: TargetTriple | None = None
    mode_requested: ValidationMode | None = None
    mode_effective: ValidationMode | None = None
    environment: EnvironmentClass | None = None
    chain: LinkerChain | None = None


class SelfCheck:
    """Runs the Android source-build self-check once per call to run()."""

    def __init__(
        self,
        options: SelfCheckOptions,
        settings: Settings | None = None,
        probe: ToolProbe | None = None,
        environ: Mapping[str, str] | None = None,
        runner: CheckRunner | None = None,
    ) -> None:
        """Initialize the self-check.

        Args:
            options: Invocation options.
            settings: Application settings (defaults to the cached settings).
            probe: Tool lookup strategy for preflight checks.
            environ: Environment for detection and overrides (defaults to os.environ).
            runner: Check runner (built from settings when omitted).
        """
        self.options = options
        self.settings = settings or get_settings()
        self.environ = environ
        check_settings = self.settings.check

        self.preflight = PreflightChecker(probe=probe, ndk_host_tag=check_settings.ndk_host_tag)
        self.diagnostician = BuildDiagnostician(ndk_host_tag=check_settings.ndk_host_tag)
        self.runner = runner or CheckRunner(
            diagnostician=self.diagnostician,
            cwd=options.project_root,
            target_dir=check_settings.check_target_dir,
            extra_args=check_settings.extra_check_args,
        )

    @property
    def cargo_config_path(self) -> Path:
        path = self.settings.check.cargo_config
        if path.is_absolute():
            return path
        return self.options.project_root / path

    def run(self) -> RunReport:
        """Execute the pipeline and build the run report."""
        ctx = RunContext()
        try:
            self._execute(ctx)
        except SelfCheckError as e:
            logger.error(e.message)
            return self._build_report(ctx, error=e)
        return self._build_report(ctx)

    def _execute(self, ctx: RunContext) -> None:
        options = self.options
        diagnose_only = options.diagnose_log is not None

        ctx.target, ctx.mode_requested = validate_invocation(options.target, options.mode)
        ctx.environment = detect_environment(self.environ)
        ctx.mode_effective = resolve_mode(ctx.mode_requested, ctx.environment)

        logger.info(f"project: {options.project_root}")
        logger.info(f"target: {ctx.target.value}")
        if ctx.environment is EnvironmentClass.TERMUX:
            logger.info("environment: Termux detected")
        else:
            logger.info("environment: non-Termux (likely desktop/CI)")
        logger.info(f"mode: {ctx.mode_effective.value}")

        if not diagnose_only:
            self.preflight.check_dependencies(ctx.target)

        resolver = OverrideResolver(self.cargo_config_path, environ=self.environ)
        ctx.chain = resolver.resolve(ctx.target)

        self.preflight.run(
            ctx.target,
            ctx.mode_effective,
            ctx.environment,
            ctx.chain,
            ctx.findings,
            diagnose_only=diagnose_only,
        )

        if diagnose_only:
            if options.run_check:
                logger.warning("--run-check is ignored when --diagnose-log is given")
            logger.info(f"diagnosing provided build log: {options.diagnose_log}")
            self.diagnostician.diagnose(
                options.diagnose_log, ctx.target, ctx.mode_effective, ctx.findings
            )
            logger.info("diagnosis completed")
            return

        if options.run_check:
            result = self.runner.run(ctx.target, ctx.mode_effective, ctx.findings)
            logger.debug(f"check result: {result.to_dict()}")
        else:
            logger.info("skip build check (use --run-check to enable)")

        logger.info("self-check completed")

    def _build_report(self, ctx: RunContext, error: SelfCheckError | None = None) -> RunReport:
        chain = ctx.chain
        findings = ctx.findings
        exit_code = 1 if error else 0

        return RunReport(
            status=RunStatus.ERROR if error else RunStatus.OK,
            exit_code=exit_code,
            error_message=error.message if error else None,
            target=ctx.target,
            mode_requested=ctx.mode_requested,
            mode_effective=ctx.mode_effective,
            environment=ctx.environment,
            run_check=self.options.run_check,
            diagnose_log=str(self.options.diagnose_log) if self.options.diagnose_log else None,
            config_linker=chain.config_linker if chain else None,
            cargo_linker_override=chain.cargo_linker_override if chain else None,
            cc_linker_override=chain.cc_linker_override if chain else None,
            effective_linker=chain.effective_linker if chain else None,
            rules_version=RULES_VERSION,
            warnings=findings.warnings,
            detections=findings.detections,
            suggestions=findings.suggestions,
        )
