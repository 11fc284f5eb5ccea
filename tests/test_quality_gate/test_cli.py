"""Tests for the quality-gates command line."""

from __future__ import annotations

from pathlib import Path

import yaml
from typer.testing import CliRunner

from src.quality_gate.cli import EXIT_FAILED, EXIT_PASSED, EXIT_WAITING, app

runner = CliRunner()


def _write_line(tmp_path: Path, gates: list[dict]) -> Path:
    path = tmp_path / "line.yml"
    path.write_text(yaml.safe_dump({"name": "cli", "gates": gates}), encoding="utf-8")
    return path


class TestEvaluateCommand:
    def test_passing_line(self, tmp_path: Path, fixtures_dir: Path):
        config = _write_line(
            tmp_path,
            [{"name": "Deps", "steps": [{"kind": "dependency_declaration"}]}],
        )
        result = runner.invoke(
            app, ["evaluate", str(config), str(fixtures_dir / "logs/maven_build.log")]
        )
        assert result.exit_code == EXIT_PASSED
        assert "UNSTABLE" in result.output

    def test_failing_line(self, fixtures_dir: Path):
        result = runner.invoke(
            app,
            [
                "evaluate",
                str(fixtures_dir / "quality-line.yml"),
                str(fixtures_dir / "logs/maven_build.log"),
            ],
        )
        assert result.exit_code == EXIT_FAILED
        assert "FAILURE" in result.output

    def test_waiting_line(self, tmp_path: Path, fixtures_dir: Path):
        config = _write_line(tmp_path, [{"name": "Approval", "steps": ["manual"]}])
        result = runner.invoke(
            app, ["evaluate", str(config), str(fixtures_dir / "logs/multi_module.log")]
        )
        assert result.exit_code == EXIT_WAITING
        assert "NOT_BUILT" in result.output

    def test_build_result_option(self, tmp_path: Path, fixtures_dir: Path):
        config = _write_line(tmp_path, [{"name": "Build", "steps": ["build_result"]}])
        result = runner.invoke(
            app,
            [
                "evaluate",
                str(config),
                str(fixtures_dir / "logs/maven_build.log"),
                "--build-result",
                "failure",
            ],
        )
        assert result.exit_code == EXIT_FAILED

    def test_missing_config(self, tmp_path: Path):
        result = runner.invoke(
            app, ["evaluate", str(tmp_path / "none.yml"), str(tmp_path / "build.log")]
        )
        assert result.exit_code == EXIT_FAILED

    def test_unknown_step_kind(self, tmp_path: Path):
        config = _write_line(tmp_path, [{"name": "x", "steps": ["sonar"]}])
        result = runner.invoke(app, ["evaluate", str(config), str(tmp_path / "build.log")])
        assert result.exit_code == EXIT_FAILED


class TestSectionsCommand:
    def test_lists_violations(self, fixtures_dir: Path):
        result = runner.invoke(app, ["sections", str(fixtures_dir / "logs/maven_build.log")])
        assert result.exit_code == 0
        assert "undeclared" in result.output
        assert "banned" in result.output

    def test_log_without_sections(self, tmp_path: Path):
        log = tmp_path / "build.log"
        log.write_text("[INFO] BUILD SUCCESS\n", encoding="utf-8")
        result = runner.invoke(app, ["sections", str(log)])
        assert result.exit_code == 0
        assert "No dependency:analyze section found" in result.output

    def test_missing_log(self, tmp_path: Path):
        result = runner.invoke(app, ["sections", str(tmp_path / "gone.log")])
        assert result.exit_code == EXIT_FAILED
