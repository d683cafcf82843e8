"""
Scoring Configuration
Settings for the scoring service, API and CLI, read from the environment or .env.
"""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service-level defaults.

    The scoring engine receives radius and weights as arguments and never
    reads these directly.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )

    # Scoring
    default_radius_km: float = Field(default=8.0, gt=0)
    scoring_weights_version: str = "default_v1"
    scoring_weights_file: Optional[Path] = None  # JSON weights registered at API startup
    explanation_separator: str = " | "

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    enable_structured_logging: bool = False

    environment: Literal["development", "staging", "production"] = "development"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings; call get_settings.cache_clear() after changing the environment."""
    return Settings()


settings = get_settings()
