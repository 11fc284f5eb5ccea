"""The completed build a quality line is evaluated against."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from src.quality_gate.results import Result


@runtime_checkable
class LineSource(Protocol):
    """Protocol for anything that can hand over a build log line by line."""

    def read_lines(self) -> list[str]:
        """Return the log as a list of lines without line terminators.

        Raises:
            OSError: If the underlying log cannot be read.
        """
        ...


class FileLineSource:
    """Reads the log from a file on disk."""

    def __init__(self, path: Path | str, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def read_lines(self) -> list[str]:
        with open(self.path, "r", encoding=self.encoding, errors="replace") as f:
            return f.read().splitlines()

    def __repr__(self) -> str:
        return f"FileLineSource({str(self.path)!r})"


class TextLineSource:
    """Serves a log that is already held in memory."""

    def __init__(self, text: str) -> None:
        self.text = text

    def read_lines(self) -> list[str]:
        return self.text.splitlines()


@dataclass
class BuildContext:
    """What the steps of a quality line may look at.

    ``result`` is the outcome the build system reported for the build
    itself, ``log`` gives access to its captured console output and
    ``workspace`` is the directory file-based checks resolve paths in.
    """

    build_id: str
    result: Result = Result.SUCCESS
    log: LineSource | None = None
    workspace: Path = field(default_factory=lambda: Path("."))
