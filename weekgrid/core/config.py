"""
Engine configuration using Pydantic Settings.

Values are read from WEEKGRID_* environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WEEKGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Logging
    # ===========================================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ===========================================
    # Clock
    # ===========================================
    # IANA timezone used for "today" and the now indicator.
    # Empty string means the host's local time.
    TIMEZONE: str = ""

    # ===========================================
    # Allocation
    # ===========================================
    MAX_RANGES_PER_DAY: int = Field(4, ge=1)

    # ===========================================
    # Now indicator
    # ===========================================
    NOW_HINT_MAX_EXTRA_PX: int = Field(10, ge=0)
    NOW_HINT_ROW_RATIO: float = Field(0.25, ge=0, le=1)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
