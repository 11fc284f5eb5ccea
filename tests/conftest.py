"""Shared test fixtures for the quality gate test suite."""
from __future__ import annotations

from pathlib import Path

import pytest

from src.quality_gate.build import BuildContext, TextLineSource
from src.quality_gate.gate_engine import Gate, QualityLine
from src.quality_gate.manual_step import ManualStep
from src.quality_gate.report import StepReport
from src.quality_gate.results import Result
from src.quality_gate.steps import Step
from tests.fixtures import FIXTURES_DIR, load_log


class FixedResultStep(Step):
    """Step that always reports the same result and counts its calls."""

    kind = "fixed"

    def __init__(self, result: Result = Result.SUCCESS, name: str = "") -> None:
        super().__init__(name or f"fixed-{result.value}")
        self.result = result
        self.calls = 0

    def do_step(self, build: BuildContext, report: StepReport) -> None:
        self.calls += 1
        report.set_result(self.result, f"always {self.result.value}")


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide the directory holding sample artifacts."""
    return FIXTURES_DIR


@pytest.fixture
def maven_log() -> str:
    """Provide the sample maven console log."""
    return load_log("maven_build.log")


@pytest.fixture
def build() -> BuildContext:
    """Provide a successful build without any log content."""
    return BuildContext(build_id="42", result=Result.SUCCESS, log=TextLineSource(""))


@pytest.fixture
def maven_build(maven_log: str, fixtures_dir: Path) -> BuildContext:
    """Provide a successful build carrying the sample maven log."""
    return BuildContext(
        build_id="43",
        result=Result.SUCCESS,
        log=TextLineSource(maven_log),
        workspace=fixtures_dir,
    )


@pytest.fixture
def manual_line() -> QualityLine:
    """Provide a line: passing gate, manual gate, passing gate."""
    return QualityLine(
        name="release",
        gates=[
            Gate("Build", [FixedResultStep(Result.SUCCESS)]),
            Gate("Approval", [FixedResultStep(Result.UNSTABLE), ManualStep()]),
            Gate("Deploy", [FixedResultStep(Result.SUCCESS, name="deploy")]),
        ],
    )
