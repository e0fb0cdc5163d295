"""Main CLI entry point for the Android self-check."""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from android_selfcheck.checks.report import REPORT_FORMATS, write_report
from android_selfcheck.checks.selfcheck import SelfCheck, SelfCheckOptions
from android_selfcheck.cli.display import show_error, show_run_summary, show_success
from android_selfcheck.core.config.settings import Settings, get_settings
from android_selfcheck.core.exceptions.errors import ConfigurationError
from android_selfcheck.core.logger.logger import setup_logging
from android_selfcheck.models.report import RunReport, RunStatus
from android_selfcheck.models.target import DEFAULT_TARGET, ValidationMode

REPORT_OUTPUT_OPTIONS = ("--report-output", "--json-output")


def load_settings(settings_path: Path | None, verbose: bool) -> Settings:
    """Load settings from YAML (when given) or the environment.

    Raises:
        ConfigurationError: If the settings file cannot be loaded.
    """
    if settings_path:
        settings = Settings.from_yaml(settings_path)
    else:
        try:
            settings = get_settings()
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid ANDROID_SELFCHECK_* environment settings",
                details={"errors": e.error_count()},
            ) from e
    if verbose:
        settings = settings.model_copy(
            update={"logging": settings.logging.model_copy(update={"level": "DEBUG"})}
        )
    return settings


def emit_report(report: RunReport, report_output: Path | None, report_format: str) -> int:
    """Show the run summary and write the report when requested.

    Returns:
        Process exit code.
    """
    show_run_summary(report)

    if report_output is None:
        return report.exit_code

    try:
        write_report(report, report_output, report_format)
    except OSError as e:
        show_error("Report Not Written", f"{report_output}: {e}")
        return 1
    return report.exit_code


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--target",
    default=DEFAULT_TARGET.value,
    show_default=True,
    help="Android Rust target (aarch64-linux-android, armv7-linux-androideabi)",
)
@click.option(
    "--mode",
    default=ValidationMode.AUTO.value,
    show_default=True,
    help="Validation mode: auto, native-in-place (plain clang, no cross overrides) "
    "or cross-from-host (NDK wrapper linker + matching CC_*)",
)
@click.option(
    "--run-check",
    "--run-cargo-check",
    "run_check",
    is_flag=True,
    help="Run cargo check --locked --target <triple> --no-default-features",
)
@click.option(
    "--diagnose-log",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Diagnose an existing build error log and print targeted recovery commands",
)
@click.option(
    *REPORT_OUTPUT_OPTIONS,
    "report_output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a machine-readable report to the given path",
)
@click.option(
    "--report-format",
    type=click.Choice(REPORT_FORMATS),
    default="json",
    show_default=True,
    help="Report format",
)
@click.option(
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Project whose cargo config is checked and where the check runs",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML settings file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--version", is_flag=True, help="Show version")
@click.pass_context
def main(
    ctx: click.Context,
    target: str,
    mode: str,
    run_check: bool,
    diagnose_log: Path | None,
    report_output: Path | None,
    report_format: str,
    project_root: Path,
    settings_path: Path | None,
    verbose: bool,
    version: bool,
) -> None:
    """Validate the Android source-build environment.

    Checks native on-device builds using plain clang, NDK cross-build
    overrides (CARGO_TARGET_*_LINKER and CC_*), and diagnoses common
    cc-rs linker mismatch failures.

    Example:
        android-selfcheck --mode cross-from-host --diagnose-log build.log
    """
    if version:
        from android_selfcheck import __version__

        click.echo(f"android-selfcheck version {__version__}")
        ctx.exit(0)

    try:
        settings = load_settings(settings_path, verbose)
    except ConfigurationError as e:
        report = RunReport(
            status=RunStatus.ERROR,
            exit_code=1,
            error_message=e.message,
            run_check=run_check,
            diagnose_log=str(diagnose_log) if diagnose_log else None,
        )
        show_error("Configuration Error", e.message)
        ctx.exit(emit_report(report, report_output, report_format))

    setup_logging(settings.logging)

    options = SelfCheckOptions(
        target=target,
        mode=mode,
        run_check=run_check,
        diagnose_log=diagnose_log,
        project_root=project_root.resolve(),
    )
    report = SelfCheck(options, settings=settings).run()

    if report.success:
        show_success("Self-Check Complete", "No fatal problems found.")
    else:
        show_error("Self-Check Failed", report.error_message or "unknown error")

    ctx.exit(emit_report(report, report_output, report_format))


def requested_report(args: list[str]) -> tuple[Path | None, str]:
    """Find the report destination and format in raw arguments.

    Used when click rejects the command line, so that the failure can
    still be reported where the caller asked.
    """
    output: Path | None = None
    report_format = "json"
    for i, arg in enumerate(args):
        if arg == "--":
            break
        name, sep, value = arg.partition("=")
        if name not in REPORT_OUTPUT_OPTIONS and name != "--report-format":
            continue
        if not sep:
            if i + 1 >= len(args):
                continue
            value = args[i + 1]
        if name == "--report-format":
            if value in REPORT_FORMATS:
                report_format = value
        elif value:
            output = Path(value)
    return output, report_format


def report_usage_error(error: click.UsageError, args: list[str]) -> int:
    """Write an error report for a rejected command line when one was requested.

    Returns:
        Process exit code.
    """
    report_output, report_format = requested_report(args)
    if report_output is None:
        return 1

    report = RunReport(
        status=RunStatus.ERROR,
        exit_code=1,
        error_message=error.format_message(),
    )
    try:
        write_report(report, report_output, report_format)
    except OSError as e:
        show_error("Report Not Written", f"{report_output}: {e}")
    return 1


def run(args: list[str] | None = None) -> None:
    """Console script entry point; usage errors exit with status 1."""
    args = sys.argv[1:] if args is None else list(args)
    try:
        code = main.main(args=args, standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(report_usage_error(e, args))
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(code or 0)


if __name__ == "__main__":
    run()
