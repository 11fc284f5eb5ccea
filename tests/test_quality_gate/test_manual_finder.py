"""Tests for locating and approving pending manual steps."""

from __future__ import annotations

from src.quality_gate.build import BuildContext
from src.quality_gate.gate_engine import Gate, QualityLine, QualityLineEngine
from src.quality_gate.manual_finder import Found, ManualStepFinder, NotFound
from src.quality_gate.manual_step import ManualStep
from src.quality_gate.results import Result
from tests.conftest import FixedResultStep


def _manual(line: QualityLine) -> ManualStep:
    for gate in line.gates:
        for step in gate.steps:
            if isinstance(step, ManualStep):
                return step
    raise AssertionError("no manual step in line")


class TestManualStepFinder:
    def test_finds_pending_manual_step(self, manual_line, build):
        report = QualityLineEngine().evaluate(manual_line, build)
        manual = _manual(manual_line)

        result = ManualStepFinder(report).find(manual.resumption_token)
        assert isinstance(result, Found)
        assert result.found is True
        assert result.handle.step is manual

    def test_approve_through_handle(self, manual_line, build):
        report = QualityLineEngine().evaluate(manual_line, build)
        manual = _manual(manual_line)

        ManualStepFinder(report).find(manual.resumption_token).approve("Jane")
        assert manual.approved is True
        assert manual.approved_by == "Jane"

    def test_nothing_found_when_every_gate_passed(self, build: BuildContext):
        line = QualityLine(gates=[Gate("a", [FixedResultStep(Result.SUCCESS)])])
        report = QualityLineEngine().evaluate(line, build)
        assert ManualStepFinder(report).find("anything") == NotFound()

    def test_nothing_found_with_foreign_token(self, manual_line, build):
        report = QualityLineEngine().evaluate(manual_line, build)
        result = ManualStepFinder(report).find("not-the-token")
        assert result.found is False
        assert _manual(manual_line).approved is False

    def test_stale_token_is_rejected(self, manual_line, build):
        engine = QualityLineEngine()
        engine.evaluate(manual_line, build)
        stale = _manual(manual_line).resumption_token
        report = engine.evaluate(manual_line, build)
        assert ManualStepFinder(report).find(stale).found is False

    def test_nothing_found_when_pending_step_is_not_manual(self, build: BuildContext):
        manual = ManualStep()
        line = QualityLine(
            gates=[Gate("a", [FixedResultStep(Result.NOT_BUILT), manual])]
        )
        report = QualityLineEngine().evaluate(line, build)
        assert ManualStepFinder(report).find(manual.resumption_token).found is False

    def test_nothing_found_behind_a_failed_gate(self, build: BuildContext):
        manual = ManualStep()
        manual.resumption_token = "known"
        line = QualityLine(
            gates=[
                Gate("a", [FixedResultStep(Result.FAILURE)]),
                Gate("b", [manual]),
            ]
        )
        report = QualityLineEngine().evaluate(line, build)
        assert ManualStepFinder(report).find("known").found is False

    def test_only_first_pending_manual_step_is_addressable(self, build: BuildContext):
        first, second = ManualStep("first"), ManualStep("second")
        line = QualityLine(gates=[Gate("a", [first]), Gate("b", [second])])
        report = QualityLineEngine().evaluate(line, build)
        second.resumption_token = "second-token"
        finder = ManualStepFinder(report)
        assert finder.find("second-token").found is False
        assert finder.find(first.resumption_token).found is True

    def test_not_found_approve_is_a_no_op(self):
        NotFound().approve("anyone")

    def test_next_unbuilt_step(self, manual_line, build):
        report = QualityLineEngine().evaluate(manual_line, build)
        gate = ManualStepFinder(report).next_unbuilt_gate()
        assert gate is report.gate_reports[1]
        assert ManualStepFinder.next_unbuilt_step(gate) is gate.step_reports[1]

    def test_lookup_follows_report_changes(self, manual_line, build):
        engine = QualityLineEngine()
        report = engine.evaluate(manual_line, build)
        manual = _manual(manual_line)
        token = manual.resumption_token
        report.gate_reports[1].step_reports[1].set_result(Result.SUCCESS, "done")
        assert ManualStepFinder(report).find(token).found is False
