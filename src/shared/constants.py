"""Shared constants used across the quality gate services."""
from __future__ import annotations

# Application version
VERSION: str = "1.0.0"

# Service names
APPROVAL_SERVICE_NAME: str = "quality-gate-approval"
CLI_NAME: str = "quality-gates"

# Default location of the quality line configuration
DEFAULT_QUALITY_LINE_CONFIG: str = "quality-line.yml"
