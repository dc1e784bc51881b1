"""Application settings loaded from environment variables.

Uses pydantic-settings for validation and type coercion. All keys use the
``CAA_`` prefix (e.g. ``CAA_LOG_LEVEL``, ``CAA_STALENESS_THRESHOLD_DAYS``).
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Central configuration for the Community Access Assistant engine.

    Environment variables are loaded from a ``.env`` file when present.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ── App ────────────────────────────────────────────────────────────
    env: Literal["development", "production"] = "development"

    # ── Logging ────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # ── Scheme catalog ─────────────────────────────────────────────────
    staleness_threshold_days: int = Field(default=30, ge=0)
    scheme_data_path: Path | None = None  # None -> bundled sample catalog

    # ── Matching ───────────────────────────────────────────────────────
    top_schemes_per_member: int = Field(default=3, ge=1)

    # ── Derived Properties ─────────────────────────────────────────────

    @property
    def is_production(self) -> bool:
        return self.env == Environment.PRODUCTION


# Module-level singleton; import ``settings`` everywhere.
settings = Settings()
