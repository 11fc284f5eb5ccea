"""Sample build artifacts for quality gate tests.

- logs/maven_build.log -- a maven build running enforcer:enforce and
  dependency:analyze-only, wrapped in build server noise
- logs/multi_module.log -- two modules each running dependency:analyze
- quality-line.yml -- a three gate quality line ending in a manual step
- findbugs.xml -- a small static analysis report
"""

from __future__ import annotations

from pathlib import Path

FIXTURES_DIR = Path(__file__).parent


def fixture_path(name: str) -> Path:
    """Return the absolute path to a named fixture file."""
    path = FIXTURES_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"Fixture not found: {path}")
    return path


def load_log(name: str) -> str:
    """Load a sample build log as a string."""
    return fixture_path(f"logs/{name}").read_text(encoding="utf-8")
