"""Result severity model shared by steps, gates and quality lines."""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class Result(str, Enum):
    """Outcome of a step, a gate or a whole quality line.

    Members are declared from best to worst.  ``NOT_BUILT`` sits between
    the passing results and the failing ones, so a gate holding a pending
    step is ``NOT_BUILT`` unless another step failed outright.
    """

    SUCCESS = "success"
    UNSTABLE = "unstable"
    NOT_BUILT = "not_built"
    FAILURE = "failure"
    ABORTED = "aborted"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def is_better_or_equal(self, other: Result) -> bool:
        """Return ``True`` if this result is at least as good as *other*."""
        return self.severity <= other.severity

    @property
    def is_passing(self) -> bool:
        """SUCCESS and UNSTABLE allow a pipeline to move on."""
        return self.is_better_or_equal(Result.UNSTABLE)

    @classmethod
    def worst(cls, results: Iterable[Result]) -> Result:
        """Return the most severe of *results*, ``SUCCESS`` when empty."""
        worst = cls.SUCCESS
        for result in results:
            if result.severity > worst.severity:
                worst = result
        return worst


_SEVERITY: dict[Result, int] = {
    result: index for index, result in enumerate(Result)
}
