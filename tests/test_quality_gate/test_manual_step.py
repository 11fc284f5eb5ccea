"""Tests for the manual approval step."""

from __future__ import annotations

from src.quality_gate.build import BuildContext
from src.quality_gate.manual_step import AWAITING_MANUAL_APPROVAL, ManualStep
from src.quality_gate.report import StepReport
from src.quality_gate.results import Result


def _evaluate(step: ManualStep, build: BuildContext) -> StepReport:
    report = StepReport(step=step)
    step.step(build, report)
    return report


class TestManualStep:
    def test_pending_evaluation_is_not_built(self, build: BuildContext):
        step = ManualStep()
        report = _evaluate(step, build)
        assert report.result is Result.NOT_BUILT
        assert report.reason == AWAITING_MANUAL_APPROVAL
        assert step.resumption_token != ""

    def test_every_pending_evaluation_mints_a_new_token(self, build: BuildContext):
        step = ManualStep()
        _evaluate(step, build)
        first = step.resumption_token
        _evaluate(step, build)
        assert step.resumption_token != first
        assert not step.has_token(first)

    def test_approval_is_consumed_once(self, build: BuildContext):
        step = ManualStep()
        _evaluate(step, build)
        old_token = step.resumption_token

        step.approve("Jane Doe")
        approved = _evaluate(step, build)
        assert approved.result is Result.SUCCESS
        assert approved.reason == "Manually approved by Jane Doe"
        assert step.approved is False

        again = _evaluate(step, build)
        assert again.result is Result.NOT_BUILT
        assert step.resumption_token not in ("", old_token)

    def test_unknown_approver(self, build: BuildContext):
        step = ManualStep()
        step.approve()
        report = _evaluate(step, build)
        assert report.reason == "Manually approved by Unknown"

    def test_approve_is_idempotent(self, build: BuildContext):
        step = ManualStep()
        step.approve("a")
        step.approve("a")
        assert _evaluate(step, build).result is Result.SUCCESS
        assert _evaluate(step, build).result is Result.NOT_BUILT

    def test_description_carries_token(self, build: BuildContext):
        step = ManualStep()
        _evaluate(step, build)
        assert step.description == f"Wait for manual approval ({step.resumption_token})"

    def test_fresh_step_has_no_token(self):
        step = ManualStep()
        assert step.has_token("") is False

    def test_steps_compare_by_identity(self):
        assert ManualStep() != ManualStep()
