"""Build log parser that cuts a maven console log into per-goal sections.

The parser walks the log once.  A line announcing a known plugin goal
opens a section for that goal; the next goal banner or the closing
dashed line ends it.  Only lines matching the goal's content filter are
kept, which drops interleaved output of other tools.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable, Iterator

from src.quality_gate.build import LineSource
from src.quality_gate.exceptions import LogNotParsedError, LogSourceError

logger = logging.getLogger(__name__)

LOG_LEVEL_REGEX = r"^\s*(\[)?(INFO|WARNING)(\]|:)? "

GOAL_START = re.compile(LOG_LEVEL_REGEX + r"---.*")
END_OF_BUILD = re.compile(LOG_LEVEL_REGEX + r"[-]*$")

# Restricts a section to maven output (drops [HUDSON] and similar tags)
MAVEN_OUTPUT = re.compile(LOG_LEVEL_REGEX + r".*")
BANNED_OUTPUT = re.compile(r"Found Banned Dependency:.*")

# Console notes the build server embeds into each annotated line
_CONSOLE_NOTE = re.compile("\u001b\\[8mha:[^=]+==\u001b\\[0m")


class Goal(Enum):
    """Maven goals whose output is extracted as a section."""

    DEPENDENCY_ANALYSE = (
        LOG_LEVEL_REGEX + r"--- maven-dependency-plugin:[^:]+:analyze(-only| ).*",
        MAVEN_OUTPUT,
    )
    BANNED_DEPENDENCY_ANALYSE = (
        LOG_LEVEL_REGEX + r"--- maven-enforcer-plugin:[^:]+:enforce.*",
        BANNED_OUTPUT,
    )

    def __init__(self, start_regex: str, line_pattern: re.Pattern[str]) -> None:
        self.start_pattern = re.compile(start_regex)
        self.line_pattern = line_pattern

    @classmethod
    def matching(cls, line: str) -> Goal | None:
        """Return the first goal whose banner matches *line*, if any."""
        for goal in cls:
            if goal.start_pattern.fullmatch(line):
                return goal
        return None


def eliminate_color_escape_codes(line: str) -> str:
    """Strip the console note escape sequence from *line*."""
    return _CONSOLE_NOTE.sub("", line)


class BuildLogParser:
    """Splits a build log into sections keyed by :class:`Goal`.

    Usage
    -----
    ::

        parser = BuildLogParser()
        parser.parse(FileLineSource("build.log"))
        section = parser.section_for(Goal.DEPENDENCY_ANALYSE)
    """

    def __init__(self) -> None:
        self._parsed = False
        self._sections: dict[Goal, str] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, source: LineSource | None) -> None:
        """Read all lines from *source* and parse them.

        Raises:
            LogSourceError: If no source is given or reading it fails.
        """
        if source is None:
            raise LogSourceError("No build log available")
        logger.debug("Parsing build log from %r", source)
        try:
            lines = source.read_lines()
        except OSError as exc:
            raise LogSourceError(f"Could not read build log: {exc}") from exc
        self.parse_lines(lines)

    def parse_lines(self, lines: Iterable[str]) -> None:
        """Parse an already available sequence of log lines."""
        sections: dict[Goal, list[str]] = {}
        iterator = (eliminate_color_escape_codes(line) for line in lines)

        goal: Goal | None = None
        for line in iterator:
            goal = Goal.matching(line)
            # A section may end on the banner of the next goal; keep going
            # from that banner without reading a new line.
            while goal is not None:
                goal = self._extract_section(iterator, goal, sections)

        self._sections = {
            goal: "".join(content) for goal, content in sections.items()
        }
        self._parsed = True
        logger.debug(
            "Build log parsed: sections=%s",
            ", ".join(goal.name for goal in self._sections) or "none",
        )

    def section_for(self, goal: Goal) -> str | None:
        """Return the captured content of *goal*.

        Returns ``None`` when the goal never ran, which is different from
        an empty string for a goal that ran without relevant output.

        Raises:
            LogNotParsedError: If called before a log was parsed.
        """
        if not self._parsed:
            raise LogNotParsedError()
        return self._sections.get(goal)

    @property
    def sections(self) -> dict[Goal, str]:
        if not self._parsed:
            raise LogNotParsedError()
        return dict(self._sections)

    @property
    def is_parsed(self) -> bool:
        return self._parsed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_section(
        lines: Iterator[str],
        goal: Goal,
        sections: dict[Goal, list[str]],
    ) -> Goal | None:
        """Collect the lines of one section of *goal*.

        Returns the goal announced by the terminating line, if the
        section was closed by another known goal banner.
        """
        content = sections.setdefault(goal, [])
        for line in lines:
            if GOAL_START.fullmatch(line) or END_OF_BUILD.fullmatch(line):
                return Goal.matching(line)
            if goal.line_pattern.fullmatch(line):
                content.append(line + "\n")
        return None
