"""Rich output formatting helpers for the warnhub CLI.

Provides consistent, severity-colored terminal output for execution
outcomes, single analysis results and the tool catalog.

Status Color Mapping:
    FAILED = bold red, WARNING_HIGH = red, WARNING_NORMAL = yellow,
    WARNING_LOW = cyan, PASSED = green, INACTIVE = dim
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from warnhub.core.aggregation import AnalysisResult, Status
from warnhub.core.issues import Severity
from warnhub.parsers.registry import ToolRegistry
from warnhub.recording import BuildResult, ExecutionOutcome

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING_HIGH: "red",
    Severity.WARNING_NORMAL: "yellow",
    Severity.WARNING_LOW: "cyan",
}

_STATUS_STYLES: dict[Status, str] = {
    Status.FAILED: "bold red",
    Status.WARNING_HIGH: "red",
    Status.WARNING_NORMAL: "yellow",
    Status.WARNING_LOW: "cyan",
    Status.PASSED: "green",
    Status.INACTIVE: "dim",
}

_BUILD_STYLES: dict[BuildResult, str] = {
    BuildResult.SUCCESS: "bold green",
    BuildResult.UNSTABLE: "bold yellow",
    BuildResult.FAILURE: "bold red",
}

# Issues listed per result in detail view.
_MAX_ISSUES = 50

console = Console()


def severity_style(severity: Severity) -> str:
    """Return the Rich style string for a given severity."""
    return _SEVERITY_STYLES.get(severity, "white")


def status_style(status: Status) -> str:
    """Return the Rich style string for a given status."""
    return _STATUS_STYLES.get(status, "white")


def print_outcome(outcome: ExecutionOutcome) -> None:
    """Print a summary table of all results plus build-level errors."""
    for message in outcome.error_messages:
        console.print(f"[bold red]ERROR:[/bold red] {escape(message)}")

    if not outcome.results:
        console.print("[dim]No results recorded.[/dim]")
    else:
        table = Table(title="warnhub Results", show_header=True, header_style="bold")
        table.add_column("ID", style="bold")
        table.add_column("Name")
        table.add_column("Total", justify="right")
        table.add_column("New", justify="right")
        table.add_column("Fixed", justify="right")
        table.add_column("Per Origin")
        table.add_column("Status", justify="center")
        for result in outcome.results:
            per_origin = ", ".join(
                f"{origin}={count}" for origin, count in result.size_per_origin.items()
            )
            table.add_row(
                result.id,
                result.name,
                str(result.total_size),
                str(result.new_size),
                str(result.fixed_size),
                per_origin or "-",
                Text(result.status.name, style=status_style(result.status)),
            )
        console.print(table)

    verdict = Text(outcome.build_result.value, style=_BUILD_STYLES[outcome.build_result])
    console.print(Text.assemble(("Build result: ", "bold"), verdict))


def print_result_detail(result: AnalysisResult, show_messages: bool = True) -> None:
    """Print one result: header, issues and (optionally) its messages."""
    header = Text.assemble(
        ("Result: ", "bold"), f"{result.name} ({result.id})",
        ("  Issues: ", "bold"), (str(result.total_size), ""),
        ("  Status: ", "bold"), (result.status.name, status_style(result.status)),
    )
    console.print(Panel(header, title="Analysis Result"))

    if result.issues:
        table = Table(title="Issues", show_header=True)
        table.add_column("Severity", justify="center")
        table.add_column("Origin", style="dim")
        table.add_column("File")
        table.add_column("Line", justify="right")
        table.add_column("Message")
        for issue in result.issues[:_MAX_ISSUES]:
            table.add_row(
                Text(issue.severity.name, style=severity_style(issue.severity)),
                issue.origin_id,
                Text(issue.file_path or "-"),
                str(issue.line_start) if issue.has_line else "-",
                Text(issue.message),
            )
        console.print(table)
        if result.total_size > _MAX_ISSUES:
            console.print(f"[dim]... and {result.total_size - _MAX_ISSUES} more issues[/dim]")
    else:
        console.print("[green]No issues.[/green]")

    if show_messages:
        for message in result.info_messages:
            console.print(f"[dim]INFO:[/dim] {escape(message)}")
        for message in result.error_messages:
            console.print(f"[red]ERROR:[/red] {escape(message)}")


def print_tools(registry: ToolRegistry) -> None:
    """Print the catalog of available tools."""
    table = Table(title=f"{len(registry)} Supported Tools", show_header=True, header_style="bold")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Default Pattern")
    table.add_column("Console Log", justify="center")
    for descriptor in registry:
        table.add_row(
            descriptor.id,
            descriptor.name,
            descriptor.default_pattern or "-",
            "yes" if descriptor.can_scan_console_log else "no",
        )
    console.print(table)
