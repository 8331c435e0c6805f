"""Centralized settings using pydantic-settings.

All environment variable reads are consolidated here. Settings only feed
logging and the command-line defaults; the computation core always takes
its configuration explicitly.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    All env vars are prefixed with SPCENGINE_ (case-insensitive).
    """

    model_config = SettingsConfigDict(
        env_prefix="SPCENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_format: str = "console"
    log_level: str = "INFO"

    # Chart defaults
    xbar_subgroup_size: int = Field(default=5, ge=2, le=10)
    ewma_lambda: float = Field(default=0.1, gt=0, le=1)
    ewma_l: float = Field(default=2.7, gt=0)
    cusum_h: float = Field(default=5.0, gt=0)
    cusum_k: float = Field(default=0.5, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings singleton."""
    return Settings()
