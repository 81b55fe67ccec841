"""Application configuration."""

import logging
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Search settings loaded from environment variables."""

    step_grams: float = Field(default=1.0, gt=0)
    max_iterations: int | None = Field(default=None, gt=0)
    log_level: str = "INFO"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="MIX_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_log_level(raw: str | None) -> int:
    """Parse a log level name, falling back to INFO."""
    if raw is None:
        return logging.INFO
    cleaned = raw.strip().upper()
    if cleaned.isdigit():
        return int(cleaned)
    level = logging.getLevelName(cleaned)
    if isinstance(level, int):
        return level
    return logging.INFO
