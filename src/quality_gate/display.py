"""Rich-based terminal display of quality line reports.

Uses a module-level :class:`~rich.console.Console` so that all output of
a CLI session shares the same formatting.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.quality_gate.dependency_parsers import (
    BannedDependencyAnalysis,
    DependencyAnalysis,
)
from src.quality_gate.report import QualityLineReport
from src.quality_gate.results import Result

_console = Console()

_RESULT_STYLE: dict[Result, str] = {
    Result.SUCCESS: "green",
    Result.UNSTABLE: "yellow",
    Result.NOT_BUILT: "cyan",
    Result.FAILURE: "red",
    Result.ABORTED: "dim",
}


def _result_text(result: Result) -> Text:
    return Text(result.value.upper(), style=_RESULT_STYLE.get(result, ""))


def print_report(report: QualityLineReport, console: Console | None = None) -> None:
    """Print one table row per step, grouped by gate."""
    console = console or _console
    table = Table(
        title=f"Quality line '{report.name}' -- build {report.build_id}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Gate", style="cyan", min_width=16)
    table.add_column("Step", min_width=20)
    table.add_column("Result", justify="center", min_width=10)
    table.add_column("Reason")

    for gate_report in report.gate_reports:
        for index, step_report in enumerate(gate_report.step_reports):
            table.add_row(
                gate_report.name if index == 0 else "",
                step_report.step.description,
                _result_text(step_report.result),
                step_report.reason,
            )
        if not gate_report.step_reports:
            table.add_row(gate_report.name, "-", _result_text(gate_report.result), "")

    console.print(table)
    console.print(
        Panel(
            _result_text(report.result),
            title="[bold]Overall[/bold]",
            border_style=_RESULT_STYLE.get(report.result, "blue"),
            expand=False,
        )
    )


def print_dependency_findings(
    analysis: DependencyAnalysis | None,
    banned: BannedDependencyAnalysis | None,
    console: Console | None = None,
) -> None:
    """Print the violations extracted from a build log."""
    console = console or _console
    table = Table(title="Dependency findings", show_header=True, header_style="bold magenta")
    table.add_column("Problem", style="cyan", min_width=12)
    table.add_column("Dependency")

    if analysis is None:
        console.print("[dim]No dependency:analyze section found[/dim]")
    else:
        for dependency in analysis.undeclared:
            table.add_row("undeclared", dependency)
        for dependency in analysis.unused:
            table.add_row("unused", dependency)

    if banned is None:
        console.print("[dim]No enforcer:enforce section found[/dim]")
    else:
        for dependency in banned.banned:
            table.add_row("banned", dependency)

    console.print(table)
