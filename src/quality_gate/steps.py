"""Base class for the verification steps of a quality line."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from xml.etree.ElementTree import ParseError

from src.quality_gate.build import BuildContext
from src.quality_gate.exceptions import LogSourceError
from src.quality_gate.results import Result

if TYPE_CHECKING:
    from src.quality_gate.report import StepReport

logger = logging.getLogger(__name__)

# Failures of the build's artifacts that a step reports instead of raising
_REPORTABLE_ERRORS = (LogSourceError, OSError, ParseError)


class Step(ABC):
    """A unit of verification work that writes its outcome into a report.

    Subclasses implement :meth:`do_step`.  Callers use :meth:`step`,
    which turns unreadable inputs into a ``FAILURE`` carrying the error
    message instead of aborting the whole evaluation.
    """

    kind: str = "step"

    def __init__(self, name: str = "") -> None:
        self.name = name or self.kind

    @property
    def description(self) -> str:
        return self.name

    def step(self, build: BuildContext, report: StepReport) -> None:
        try:
            self.do_step(build, report)
        except _REPORTABLE_ERRORS as exc:
            logger.warning(
                "Step '%s' failed on build %s: %s", self.name, build.build_id, exc
            )
            report.set_result(
                Result.FAILURE, f"{type(exc).__name__}: {exc}"
            )

    @abstractmethod
    def do_step(self, build: BuildContext, report: StepReport) -> None:
        """Evaluate *build* and record the outcome on *report*."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class BuildStep(Step):
    """A step that only makes sense on a build that itself passed."""

    def step(self, build: BuildContext, report: StepReport) -> None:
        if not build.result.is_passing:
            report.set_result(
                Result.FAILURE,
                f"Build did not succeed ({build.result.value})",
            )
            return
        super().step(build, report)
