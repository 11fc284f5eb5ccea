"""Service configuration using pydantic-settings."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from src.shared.constants import DEFAULT_QUALITY_LINE_CONFIG


class SharedConfig(BaseSettings):
    """Base configuration shared across all entry points."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


class ApprovalServiceConfig(SharedConfig):
    """Configuration for the approval HTTP service."""
    quality_line_config: str = Field(
        default=DEFAULT_QUALITY_LINE_CONFIG,
        validation_alias="QUALITY_LINE_CONFIG",
    )
