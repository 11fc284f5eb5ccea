"""Tests for the pydantic-settings service configuration."""
from __future__ import annotations

from src.shared.config import ApprovalServiceConfig
from src.shared.constants import DEFAULT_QUALITY_LINE_CONFIG


class TestApprovalServiceConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("QUALITY_LINE_CONFIG", raising=False)
        config = ApprovalServiceConfig()
        assert config.log_level == "info"
        assert config.quality_line_config == DEFAULT_QUALITY_LINE_CONFIG

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("QUALITY_LINE_CONFIG", "/etc/quality-line.yml")
        config = ApprovalServiceConfig()
        assert config.log_level == "debug"
        assert config.quality_line_config == "/etc/quality-line.yml"

