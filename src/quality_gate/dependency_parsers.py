"""Classifiers turning a dependency section of the build log into violations.

Both functions are pure: they take the text of one section as returned by
:meth:`BuildLogParser.section_for` and ignore every line they do not
recognise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

_BANNED_ARTIFACT = re.compile(r"Found Banned Dependency: (.*:.*:.*:.*)")

# group:artifact:type:version:scope
_ARTIFACT = re.compile(r".*:.*:.*:.*:.*")


class DependencyProblemType(str, Enum):
    """Kinds of problems reported by ``dependency:analyze``."""

    UNUSED = "unused"
    UNDECLARED = "undeclared"


_PROBLEM_HEADERS: list[tuple[DependencyProblemType, re.Pattern[str]]] = [
    (DependencyProblemType.UNUSED, re.compile(r"Unused declared")),
    (DependencyProblemType.UNDECLARED, re.compile(r"Used undeclared")),
]


@dataclass
class BannedDependencyAnalysis:
    """Banned dependencies found by the enforcer, in log order."""

    banned: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.banned)


@dataclass
class DependencyAnalysis:
    """Unused and undeclared dependencies found by ``dependency:analyze``."""

    unused: list[str] = field(default_factory=list)
    undeclared: list[str] = field(default_factory=list)

    def add_violation(self, problem: DependencyProblemType, dependency: str) -> None:
        self.violations_of(problem).append(dependency)

    def violations_of(self, problem: DependencyProblemType) -> list[str]:
        if problem is DependencyProblemType.UNUSED:
            return self.unused
        return self.undeclared

    @property
    def unused_count(self) -> int:
        return len(self.unused)

    @property
    def undeclared_count(self) -> int:
        return len(self.undeclared)

    @property
    def total(self) -> int:
        return self.unused_count + self.undeclared_count


def parse_banned_dependencies(content: str) -> BannedDependencyAnalysis:
    """Collect every ``Found Banned Dependency: g:a:t:v`` line of *content*.

    Duplicates are kept; a dependency banned in two modules counts twice.
    """
    result = BannedDependencyAnalysis()
    for line in content.splitlines():
        if not line.strip():
            continue
        match = _BANNED_ARTIFACT.fullmatch(line)
        if match:
            result.banned.append(match.group(1))
    return result


def _match_problem_header(line: str) -> DependencyProblemType | None:
    for problem, pattern in _PROBLEM_HEADERS:
        if pattern.search(line):
            return problem
    return None


def parse_dependency_analysis(content: str) -> DependencyAnalysis:
    """Classify the artifacts listed under the analyze headers of *content*.

    A header line selects the problem kind for the artifact lines that
    follow it.  Artifact lines seen before any header are ignored.
    """
    result = DependencyAnalysis()
    current: DependencyProblemType | None = None
    for line in content.splitlines():
        if not line.strip():
            continue
        problem = _match_problem_header(line)
        if problem is not None:
            current = problem
        elif current is not None and _ARTIFACT.fullmatch(line):
            # drop the log level prefix
            dependency = line[line.rfind("]") + 1:].strip()
            result.add_violation(current, dependency)
    return result
