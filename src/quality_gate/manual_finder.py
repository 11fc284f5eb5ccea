"""Locates the manual step a resumption token refers to.

The lookup is recomputed from the report tree on every request: only the
first pending step of the first pending gate can be approved, and only
with the token minted by its latest evaluation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from src.quality_gate.manual_step import ManualStep
from src.quality_gate.report import GateReport, QualityLineReport, StepReport
from src.quality_gate.results import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManualStepHandle:
    """Gives access to the single operation allowed on a found step."""

    step: ManualStep

    def approve(self, approver: str | None = None) -> None:
        self.step.approve(approver)


@dataclass(frozen=True)
class Found:
    handle: ManualStepHandle

    found = True

    def approve(self, approver: str | None = None) -> None:
        self.handle.approve(approver)


@dataclass(frozen=True)
class NotFound:
    found = False

    def approve(self, approver: str | None = None) -> None:
        """Nothing to approve."""


FindResult = Union[Found, NotFound]


class ManualStepFinder:
    """Searches a :class:`QualityLineReport` for an approvable manual step."""

    def __init__(self, report: QualityLineReport) -> None:
        self._report = report

    def find(self, token: str) -> FindResult:
        gate_report = self.next_unbuilt_gate()
        if gate_report is None:
            return NotFound()

        step_report = self.next_unbuilt_step(gate_report)
        if step_report is None:
            return NotFound()

        step = step_report.step
        if not isinstance(step, ManualStep):
            logger.debug(
                "Pending step '%s' of gate '%s' is not a manual step",
                step.name,
                gate_report.name,
            )
            return NotFound()
        if not step.has_token(token):
            logger.info(
                "Token %s does not match pending manual step '%s'", token, step.name
            )
            return NotFound()
        return Found(ManualStepHandle(step))

    def next_unbuilt_gate(self) -> GateReport | None:
        """Return the first NOT_BUILT gate, unless a failed gate comes first."""
        for gate_report in self._report.gate_reports:
            result = gate_report.result
            if result.is_passing:
                continue
            if result is Result.NOT_BUILT:
                return gate_report
            return None
        return None

    @staticmethod
    def next_unbuilt_step(gate_report: GateReport) -> StepReport | None:
        for step_report in gate_report.step_reports:
            if step_report.is_not_built:
                return step_report
        return None
