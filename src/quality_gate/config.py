"""Configuration dataclasses and loader for quality lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.quality_gate.exceptions import ConfigurationError
from src.quality_gate.gate_engine import Gate, QualityLine
from src.quality_gate.registry import StepRegistry, default_registry


@dataclass
class StepConfig:
    """One configured step: its registry kind and constructor options."""

    kind: str
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class GateConfig:
    """A gate and its steps in evaluation order."""

    name: str
    steps: list[StepConfig] = field(default_factory=list)


@dataclass
class QualityLineConfig:
    """Top-level configuration of a quality line."""

    name: str = "default"
    gates: list[GateConfig] = field(default_factory=list)


def _parse_step(raw: Any, gate_name: str) -> StepConfig:
    if isinstance(raw, str):
        return StepConfig(kind=raw)
    if not isinstance(raw, dict) or "kind" not in raw:
        raise ConfigurationError(
            f"Step in gate '{gate_name}' needs a 'kind': {raw!r}"
        )
    options = {k: v for k, v in raw.items() if k != "kind"}
    return StepConfig(kind=str(raw["kind"]), options=options)


def _parse_gate(raw: Any, index: int) -> GateConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Gate #{index + 1} must be a mapping")
    name = str(raw.get("name") or f"Gate {index + 1}")
    steps = [_parse_step(step, name) for step in raw.get("steps") or []]
    return GateConfig(name=name, steps=steps)


def parse_quality_line_config(raw: dict[str, Any]) -> QualityLineConfig:
    """Build a :class:`QualityLineConfig` from already loaded YAML data.

    Unknown keys are ignored so that forward-compatible files work.
    """
    gates = raw.get("gates") or []
    if not isinstance(gates, list):
        raise ConfigurationError("'gates' must be a list")
    return QualityLineConfig(
        name=str(raw.get("name") or "default"),
        gates=[_parse_gate(gate, i) for i, gate in enumerate(gates)],
    )


def load_quality_line_config(path: Path | str | None = None) -> QualityLineConfig:
    """Load a quality line configuration from a YAML file.

    Args:
        path: Path to the config YAML.  If ``None`` or the file does not
              exist, returns an empty default line.

    Returns:
        Populated configuration dataclass.
    """
    if path is None:
        return QualityLineConfig()

    path = Path(path)
    if not path.exists():
        return QualityLineConfig()

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    return parse_quality_line_config(raw)


def build_quality_line(
    config: QualityLineConfig, registry: StepRegistry | None = None
) -> QualityLine:
    """Instantiate the steps of *config* through *registry*."""
    registry = registry or default_registry()
    return QualityLine(
        name=config.name,
        gates=[
            Gate(
                name=gate.name,
                steps=[registry.create(step.kind, **step.options) for step in gate.steps],
            )
            for gate in config.gates
        ],
    )
