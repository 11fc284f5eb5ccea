"""Per-build state of a quality line and serialized access to it."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from src.quality_gate.build import BuildContext
from src.quality_gate.exceptions import BuildNotFoundError
from src.quality_gate.gate_engine import QualityLine, QualityLineEngine
from src.quality_gate.manual_finder import ManualStepFinder
from src.quality_gate.report import QualityLineReport

logger = logging.getLogger(__name__)


@dataclass
class ApprovalOutcome:
    """What an approval request did."""

    approved: bool
    report: QualityLineReport | None


class QualityLineRun:
    """Holds the latest report of one build's quality line.

    Evaluation reads and clears manual approvals while approval sets them,
    so both take the same lock.
    """

    def __init__(
        self,
        quality_line: QualityLine,
        build: BuildContext,
        engine: QualityLineEngine | None = None,
    ) -> None:
        self.quality_line = quality_line
        self.build = build
        self._engine = engine or QualityLineEngine()
        self._lock = threading.RLock()
        self._report: QualityLineReport | None = None

    @property
    def build_id(self) -> str:
        return self.build.build_id

    @property
    def report(self) -> QualityLineReport | None:
        return self.latest_report()

    def latest_report(self) -> QualityLineReport | None:
        """Return the latest report, waiting for a running evaluation."""
        with self._lock:
            return self._report

    def evaluate(self) -> QualityLineReport:
        with self._lock:
            self._report = self._engine.evaluate(self.quality_line, self.build)
            return self._report

    def approve(self, token: str, approver: str | None = None) -> ApprovalOutcome:
        """Approve the pending manual step addressed by *token*.

        On success the quality line is evaluated again, so the approved
        step passes and evaluation continues behind it.
        """
        with self._lock:
            if self._report is None:
                return ApprovalOutcome(approved=False, report=None)

            result = ManualStepFinder(self._report).find(token)
            if not result.found:
                logger.info(
                    "Build %s: nothing to approve for token %s", self.build_id, token
                )
                return ApprovalOutcome(approved=False, report=self._report)

            result.approve(approver)
            logger.info(
                "Build %s: manual step approved by %s, re-evaluating",
                self.build_id,
                approver or "unknown approver",
            )
            return ApprovalOutcome(approved=True, report=self.evaluate())


class RunRegistry:
    """Keeps the quality line runs of the builds currently known."""

    def __init__(self) -> None:
        self._runs: dict[str, QualityLineRun] = {}
        self._lock = threading.Lock()

    def register(self, run: QualityLineRun) -> QualityLineRun:
        with self._lock:
            self._runs[run.build_id] = run
        return run

    def get(self, build_id: str) -> QualityLineRun:
        with self._lock:
            try:
                return self._runs[build_id]
            except KeyError:
                raise BuildNotFoundError(build_id) from None

    def remove(self, build_id: str) -> None:
        with self._lock:
            if self._runs.pop(build_id, None) is None:
                raise BuildNotFoundError(build_id)

    def build_ids(self) -> list[str]:
        with self._lock:
            return list(self._runs)
