"""Exceptions raised by the quality gate core."""

from __future__ import annotations


class QualityGateError(Exception):
    """Base exception for all quality gate errors."""

    pass


class LogSourceError(QualityGateError):
    """Raised when the build log is missing or cannot be read."""

    pass


class LogNotParsedError(QualityGateError):
    """Raised when a section is requested before the log was parsed."""

    def __init__(self, message: str = "No log file was parsed") -> None:
        super().__init__(message)


class ConfigurationError(QualityGateError):
    """Raised for invalid quality line configuration."""

    pass


class UnknownStepKindError(ConfigurationError):
    """Raised when a configured step kind has no registered constructor."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unknown step kind '{kind}'")


class BuildNotFoundError(QualityGateError):
    """Raised when no quality line run is registered for a build id."""

    def __init__(self, build_id: str) -> None:
        self.build_id = build_id
        super().__init__(f"No quality line run for build '{build_id}'")
