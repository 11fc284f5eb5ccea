"""Step that holds the quality line until somebody approves it."""

from __future__ import annotations

import logging
import time
import uuid

from src.quality_gate.build import BuildContext
from src.quality_gate.report import StepReport
from src.quality_gate.results import Result
from src.quality_gate.steps import Step

logger = logging.getLogger(__name__)

AWAITING_MANUAL_APPROVAL = "Awaiting manual approval."
UNKNOWN_APPROVER = "Unknown"


def _new_token() -> str:
    return f"{time.time_ns()}-{uuid.uuid4().hex}"


class ManualStep(Step):
    """Emits ``NOT_BUILT`` until approved, then ``SUCCESS`` exactly once.

    The resumption token and the approval live in memory only.  A new
    token is minted on every evaluation, so only the token of the most
    recent pending evaluation can be used to approve.
    """

    kind = "manual"

    def __init__(self, name: str = "Manual approval") -> None:
        super().__init__(name)
        self.resumption_token = ""
        self.approved = False
        self.approved_by: str | None = None

    @property
    def description(self) -> str:
        return f"Wait for manual approval ({self.resumption_token})"

    def approve(self, approver: str | None = None) -> None:
        self.approved = True
        self.approved_by = approver

    def has_token(self, token: str) -> bool:
        return bool(self.resumption_token) and self.resumption_token == token

    def do_step(self, build: BuildContext, report: StepReport) -> None:
        self.resumption_token = _new_token()
        if not self.approved:
            logger.info(
                "Build %s waits for manual approval of '%s' (token=%s)",
                build.build_id,
                self.name,
                self.resumption_token,
            )
            report.set_result(Result.NOT_BUILT, AWAITING_MANUAL_APPROVAL)
            return

        approver = self.approved_by or UNKNOWN_APPROVER
        logger.info(
            "Build %s: '%s' approved by %s", build.build_id, self.name, approver
        )
        report.set_result(Result.SUCCESS, f"Manually approved by {approver}")
        self.approved = False
        self.approved_by = None
