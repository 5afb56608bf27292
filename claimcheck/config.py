"""
Configuration settings for claimcheck.

Uses Pydantic Settings for environment variable management with .env file support.
Every field can be overridden with a CLAIMCHECK_-prefixed environment variable.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_CATALOG_PATH = Path(__file__).parent / "catalog" / "data" / "claims.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLAIMCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Content
    # ========================================
    catalog_path: Path = Field(
        default=BUNDLED_CATALOG_PATH,
        description="JSON claim catalog to select from",
    )
    exposure_db_path: Path = Field(
        default=Path.home() / ".claimcheck" / "exposure.db",
        description="SQLite database holding individual and group exposure history",
    )

    # ========================================
    # Selection Defaults
    # ========================================
    default_count: int = Field(
        default=10,
        description="Claims per quiz when no count is given",
    )
    default_difficulty: Literal["easy", "medium", "hard", "mixed"] = Field(
        default="mixed",
        description="Difficulty mode when none is given",
    )
    selection_seed: int | None = Field(
        default=None,
        description="Seed for the selection random source (None for unseeded)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    @field_validator("default_count")
    @classmethod
    def _positive_count(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("default_count must be positive")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
