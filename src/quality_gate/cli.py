"""Command-line entry point of the quality gates."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from src.quality_gate.build import BuildContext, FileLineSource
from src.quality_gate.config import build_quality_line, load_quality_line_config
from src.quality_gate.dependency_parsers import (
    parse_banned_dependencies,
    parse_dependency_analysis,
)
from src.quality_gate.display import print_dependency_findings, print_report
from src.quality_gate.exceptions import LogSourceError, QualityGateError
from src.quality_gate.gate_engine import QualityLineEngine
from src.quality_gate.log_parser import BuildLogParser, Goal
from src.quality_gate.results import Result
from src.shared.constants import CLI_NAME

app = typer.Typer(name=CLI_NAME, help="Evaluate quality gates against a finished build.")

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_WAITING = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def evaluate(
    config: Path = typer.Argument(..., help="Quality line YAML file."),
    log: Path = typer.Argument(..., help="Console log of the build."),
    build_result: Result = typer.Option(
        Result.SUCCESS, "--build-result", help="Result the build itself reported."
    ),
    workspace: Path = typer.Option(Path("."), "--workspace", help="Build workspace."),
    build_id: str = typer.Option("local", "--build-id", help="Identifier of the build."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Evaluate a quality line once and print its report."""
    _configure_logging(verbose)
    if not config.exists():
        typer.echo(f"Config file not found: {config}", err=True)
        raise typer.Exit(code=EXIT_FAILED)

    try:
        quality_line = build_quality_line(load_quality_line_config(config))
    except QualityGateError as exc:
        typer.echo(f"Invalid quality line: {exc}", err=True)
        raise typer.Exit(code=EXIT_FAILED)

    build = BuildContext(
        build_id=build_id,
        result=build_result,
        log=FileLineSource(log),
        workspace=workspace,
    )
    report = QualityLineEngine().evaluate(quality_line, build)
    print_report(report)

    if report.result.is_passing:
        raise typer.Exit(code=EXIT_PASSED)
    if report.result is Result.NOT_BUILT:
        raise typer.Exit(code=EXIT_WAITING)
    raise typer.Exit(code=EXIT_FAILED)


@app.command()
def sections(
    log: Path = typer.Argument(..., help="Console log of the build."),
) -> None:
    """Print the dependency violations found in a build log."""
    parser = BuildLogParser()
    try:
        parser.parse(FileLineSource(log))
    except LogSourceError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_FAILED)

    analyze = parser.section_for(Goal.DEPENDENCY_ANALYSE)
    enforce = parser.section_for(Goal.BANNED_DEPENDENCY_ANALYSE)
    print_dependency_findings(
        parse_dependency_analysis(analyze) if analyze is not None else None,
        parse_banned_dependencies(enforce) if enforce is not None else None,
    )


if __name__ == "__main__":
    app()
