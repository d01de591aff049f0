"""
Configuration — typed, validated settings loaded from the environment.

Uses pydantic-settings so that an application embedding switchyard can tune
its logging with environment variables or a .env file:

    SWITCHYARD_LOG_LEVEL=DEBUG      # show short-circuit / host-failure events
    SWITCHYARD_LOG_FORMAT=json      # JSON lines instead of console output

Nothing is read at import time; call get_settings() (cached) or build a
SwitchyardSettings directly.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SwitchyardSettings(BaseSettings):
    """
    Load order (highest priority first):
      1. Explicit keyword arguments
      2. Environment variables (SWITCHYARD_*)
      3. .env file in the working directory
      4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="SWITCHYARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum level for switchyard log events")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Renderer used by configure_structlog",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept any stdlib level name, case-insensitively."""
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


@lru_cache(maxsize=1)
def get_settings() -> SwitchyardSettings:
    """Settings from the environment, loaded once."""
    return SwitchyardSettings()
