"""Engine settings using Pydantic Settings.

Centralized configuration for the WOTC screening and credit engine.
Every value can be overridden with a ``WOTC_`` environment variable, e.g.
``WOTC_CATALOG_FILE=/etc/wotc/target_groups_2025.yaml``.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EngineSettings(BaseSettings):
    """Main engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="WOTC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    name: str = Field(default="WOTC Engine", description="Application name")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")
    json_logs: bool = Field(default=False, description="Emit JSON log lines")

    # Catalog
    program_year: int = Field(default=2024, description="WOTC program year")
    catalog_file: Optional[Path] = Field(
        default=None,
        description="YAML target group file; built-in catalog when unset",
    )

    # Screening behaviour
    skip_falsy_answers: bool = Field(
        default=True,
        description="Treat explicit falsy answers ('', 0, false) like unanswered questions",
    )

    # API
    api_prefix: str = Field(default="/api/wotc", description="Router prefix")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment in ("production", "prod", "staging")


@lru_cache
def get_settings() -> EngineSettings:
    """
    Get cached engine settings instance.

    Returns:
        EngineSettings: Cached settings loaded from environment.
    """
    return EngineSettings()
