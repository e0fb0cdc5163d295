"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from android_selfcheck.models.report import RunReport

console = Console()

_NULL = "[dim]-[/]"


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="green",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def _value(value: object | None) -> str:
    if value is None:
        return _NULL
    if hasattr(value, "value"):
        value = value.value
    return escape(str(value))


def show_run_summary(report: RunReport) -> None:
    """Display the outcome of a run in a formatted table.

    Args:
        report: Report of the finished run.
    """
    console.print()

    table = Table(title="[bold]Android Self-Check[/]", show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    if report.success:
        table.add_row("Status", "[bold green]OK[/]")
    else:
        table.add_row("Status", "[bold red]ERROR[/]")
        table.add_row("Error", _value(report.error_message))

    table.add_row("Target", _value(report.target))
    table.add_row("Mode", f"{_value(report.mode_effective)} (requested {_value(report.mode_requested)})")
    table.add_row("Environment", _value(report.environment))

    table.add_section()
    table.add_row("Config Linker", _value(report.config_linker))
    table.add_row("Cargo Override", _value(report.cargo_linker_override))
    table.add_row("CC Override", _value(report.cc_linker_override))
    table.add_row("Effective Linker", _value(report.effective_linker))

    console.print(Panel(table, border_style="green" if report.success else "red"))

    _show_findings("Warnings", report.warnings, "yellow")
    _show_findings("Detections", report.detections, "red")
    _show_findings("Suggestions", report.suggestions, "blue")


def _show_findings(title: str, messages: list[str], style: str) -> None:
    if not messages:
        return
    body = "\n".join(escape(m) for m in messages)
    console.print(
        Panel(
            body,
            title=f"[bold]{title} ({len(messages)})[/]",
            border_style=style,
        )
    )
