"""Report tree of a quality line evaluation.

A :class:`QualityLineReport` holds one :class:`GateReport` per gate and
each gate report holds one :class:`StepReport` per step, in evaluation
order.  Step reports start out ``NOT_BUILT``; gate and line results are
always derived from their children and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator

from src.quality_gate.results import Result

if TYPE_CHECKING:
    from src.quality_gate.steps import Step


@dataclass(eq=False)
class StepReport:
    """Outcome of one step."""

    step: Step
    result: Result = Result.NOT_BUILT
    reason: str = ""

    def set_result(self, result: Result, reason: str = "") -> None:
        self.result = result
        self.reason = reason

    @property
    def is_not_built(self) -> bool:
        return self.result is Result.NOT_BUILT

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.step.name,
            "kind": self.step.kind,
            "description": self.step.description,
            "result": self.result.value,
            "reason": self.reason,
        }


@dataclass(eq=False)
class GateReport:
    """Outcome of one gate: the ordered reports of its steps."""

    name: str
    step_reports: list[StepReport] = field(default_factory=list)

    @property
    def result(self) -> Result:
        """Worst result among the step reports, ``SUCCESS`` if there are none."""
        return Result.worst(report.result for report in self.step_reports)

    @property
    def is_passed(self) -> bool:
        return self.result.is_passing

    @property
    def is_not_built(self) -> bool:
        return self.result is Result.NOT_BUILT

    def __iter__(self) -> Iterator[StepReport]:
        return iter(self.step_reports)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "result": self.result.value,
            "steps": [report.to_dict() for report in self.step_reports],
        }


@dataclass(eq=False)
class QualityLineReport:
    """Outcome of a whole quality line for one build."""

    name: str
    build_id: str
    gate_reports: list[GateReport] = field(default_factory=list)

    @property
    def result(self) -> Result:
        return Result.worst(report.result for report in self.gate_reports)

    def __iter__(self) -> Iterator[GateReport]:
        return iter(self.gate_reports)

    def step_reports(self) -> Iterator[StepReport]:
        """Yield every step report, gate by gate."""
        for gate_report in self.gate_reports:
            yield from gate_report.step_reports

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "build_id": self.build_id,
            "result": self.result.value,
            "gates": [report.to_dict() for report in self.gate_reports],
        }
