"""Quality line engine -- evaluates gates and their steps in order.

Gates run left to right and the steps of a gate run top to bottom:

    Gate 1 -- every step must be SUCCESS or UNSTABLE before Gate 2 runs
    Gate 2 -- same rule before Gate 3 runs
    ...

The first step that does not pass halts the line.  Its report carries the
outcome; every later step keeps the initial NOT_BUILT, so the gate holding
a pending manual step reports NOT_BUILT and a failing step fails its gate.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from src.quality_gate.build import BuildContext
from src.quality_gate.report import GateReport, QualityLineReport, StepReport
from src.quality_gate.results import Result
from src.quality_gate.steps import Step

logger = logging.getLogger(__name__)


@dataclass
class Gate:
    """A named, ordered group of steps."""

    name: str
    steps: list[Step] = field(default_factory=list)

    def create_report(self) -> GateReport:
        return GateReport(
            name=self.name,
            step_reports=[StepReport(step=step) for step in self.steps],
        )


@dataclass
class QualityLine:
    """The ordered gates a build has to pass."""

    name: str = "default"
    gates: list[Gate] = field(default_factory=list)

    def create_report(self, build_id: str) -> QualityLineReport:
        return QualityLineReport(
            name=self.name,
            build_id=build_id,
            gate_reports=[gate.create_report() for gate in self.gates],
        )


class QualityLineEngine:
    """Runs a :class:`QualityLine` against one build.

    Usage
    -----
    ::

        engine = QualityLineEngine()
        report = engine.evaluate(quality_line, BuildContext(build_id="42"))
    """

    def evaluate(self, quality_line: QualityLine, build: BuildContext) -> QualityLineReport:
        """Evaluate every gate of *quality_line* until one does not pass.

        A fresh report tree is created for each call.

        Returns
        -------
        QualityLineReport
            The report tree, its result being the worst gate result.
        """
        report = quality_line.create_report(build.build_id)
        start = time.monotonic()
        logger.info(
            "Quality line '%s': evaluating %d gates for build %s",
            quality_line.name,
            len(report.gate_reports),
            build.build_id,
        )

        for gate_report in report.gate_reports:
            if not self.evaluate_gate(gate_report, build):
                logger.warning(
                    "Quality line '%s': gate '%s' is %s -- halting",
                    quality_line.name,
                    gate_report.name,
                    gate_report.result.value,
                )
                break
            logger.info(
                "Quality line '%s': gate '%s' passed -- result=%s",
                quality_line.name,
                gate_report.name,
                gate_report.result.value,
            )

        logger.info(
            "Quality line '%s' complete for build %s -- result=%s, duration=%.3fs",
            quality_line.name,
            build.build_id,
            report.result.value,
            time.monotonic() - start,
        )
        return report

    def evaluate_gate(self, gate_report: GateReport, build: BuildContext) -> bool:
        """Run the steps of one gate in order.

        Returns ``True`` if every step passed and the line may move on.
        """
        for step_report in gate_report.step_reports:
            step_report.step.step(build, step_report)
            logger.debug(
                "Step '%s' of gate '%s': %s (%s)",
                step_report.step.name,
                gate_report.name,
                step_report.result.value,
                step_report.reason,
            )
            if not self.should_promote(step_report.result):
                return False
        return True

    @staticmethod
    def should_promote(result: Result) -> bool:
        """SUCCESS and UNSTABLE let evaluation continue, anything else halts."""
        return result.is_passing
