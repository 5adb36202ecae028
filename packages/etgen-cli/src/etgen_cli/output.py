"""Rich console output utilities for etgen-cli.

Formatted success/error/warning messages and run summaries, respecting the
NO_COLOR environment variable and the ``--no-color`` flag.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from etgen_cli.runner import RunReport

_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(force_terminal=force_terminal, no_color=no_color or _force_no_color)


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("HttpTasksTemplates.json conforms to the schema")
        ✓ HttpTasksTemplates.json conforms to the schema
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X."""
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, **kwargs)


def print_run_summary(report: RunReport) -> None:
    """Print one table row per element group, followed by any problems.

    Args:
        report: Outcome of a generation run.
    """
    table = Table(title="Element templates", show_lines=False)
    table.add_column("Group")
    table.add_column("Templates", justify="right")
    table.add_column("Output")
    table.add_column("Schema")

    for group in report.groups:
        if group.persistence_error is not None:
            status = "[red]not written[/red]"
        elif group.report is None:
            status = "-"
        elif group.report.skipped:
            status = "[yellow]skipped[/yellow]"
        elif group.report.valid:
            status = "[green]valid[/green]"
        else:
            status = f"[red]{len(group.report.diagnostics)} issue(s)[/red]"

        output = str(group.output_path) if group.written else "-"
        table.add_row(escape(group.group), str(len(group.templates)), escape(output), status)

    console.print(table)

    for group in report.groups:
        for build_error in group.build_errors:
            warning(escape(f"{group.group}: {build_error.user_message}"))
        if group.persistence_error is not None:
            error(escape(f"{group.group}: {group.persistence_error.user_message}"))
        if group.report is not None:
            for diagnostic in group.report.diagnostics:
                warning(escape(f"{group.report.source}: {diagnostic}"))

    if report.schema_error is not None:
        warning(escape(f"Schema validation skipped. {report.schema_error.user_message}"))


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Args:
        no_color: If True, disable colored output.
    """
    global console
    console = create_console(no_color=no_color)
