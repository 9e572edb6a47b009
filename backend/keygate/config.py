"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Settings are consumed once at startup to build the pipeline
    - get_settings() is cached (lru_cache) - single instance per process
    - retention_days >= 1, future_skew_days >= 0

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Optional modifiers toggled by named boolean flags (KEYGATE_FIX_ZERO_ROLLING_PERIOD, ...)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from keygate.core.domain_types import DEFAULT_FUTURE_SKEW_DAYS, DEFAULT_RETENTION_DAYS


class Settings(BaseSettings):
    """Pipeline settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KEYGATE_", env_file=".env", case_sensitive=False,
    )

    # Date windows
    retention_days: int = Field(DEFAULT_RETENTION_DAYS, ge=1)
    future_skew_days: int = Field(DEFAULT_FUTURE_SKEW_DAYS, ge=0)

    # Optional modifiers
    fix_zero_rolling_period: bool = True
    normalize_ios_rolling_period: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
