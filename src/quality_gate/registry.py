"""Explicit registry mapping configured step kinds to constructors."""

from __future__ import annotations

from typing import Any, Callable

from src.quality_gate.checks import (
    BannedDependencyCheck,
    BuildResultCheck,
    DependencyDeclarationCheck,
    XPathExpressionCountCheck,
)
from src.quality_gate.exceptions import ConfigurationError, UnknownStepKindError
from src.quality_gate.manual_step import ManualStep
from src.quality_gate.steps import Step

StepFactory = Callable[..., Step]


class StepRegistry:
    """Looks up step constructors by the ``kind`` used in configuration."""

    def __init__(self) -> None:
        self._factories: dict[str, StepFactory] = {}

    def register(self, kind: str, factory: StepFactory) -> None:
        if kind in self._factories:
            raise ConfigurationError(f"Step kind '{kind}' is already registered")
        self._factories[kind] = factory

    def create(self, kind: str, **options: Any) -> Step:
        try:
            factory = self._factories[kind]
        except KeyError:
            raise UnknownStepKindError(kind) from None
        try:
            return factory(**options)
        except TypeError as exc:
            raise ConfigurationError(
                f"Invalid options for step kind '{kind}': {exc}"
            ) from exc

    def kinds(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, kind: object) -> bool:
        return kind in self._factories


def default_registry() -> StepRegistry:
    """Return a registry holding every built-in step kind."""
    registry = StepRegistry()
    for step_cls in (
        BuildResultCheck,
        DependencyDeclarationCheck,
        BannedDependencyCheck,
        XPathExpressionCountCheck,
        ManualStep,
    ):
        registry.register(step_cls.kind, step_cls)
    return registry
