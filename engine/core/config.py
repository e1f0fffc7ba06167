"""Engine configuration using pydantic-settings."""

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.leniency import (
    resolve_freeze_penalty,
    resolve_max_freezes_per_week,
    resolve_streak_freeze_days,
)
from core.logger import DEFAULT_PLUGIN_NAME


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    plugin_name: str = DEFAULT_PLUGIN_NAME

    # 0 disables debug_log() output entirely
    debug_level: int = 0

    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    # Leniency parameters. Invalid values fall back to 0 (no freezes).
    streak_freeze_days: int = 0
    max_freezes_per_week: int = 0  # 0 = no weekly cap
    freeze_penalty: float = 0.0

    # Number of days shown in the habit grid, ending today
    display_days: int = Field(default=21, ge=1)

    # Share of habits (0-100) that must be done for a day to count as perfect
    perfect_day_percentage: float = Field(default=100.0, ge=0, le=100)

    @field_validator("streak_freeze_days", mode="before")
    @classmethod
    def _sanitize_freeze_days(cls, value: Any) -> int | float:
        return resolve_streak_freeze_days(value)

    @field_validator("max_freezes_per_week", mode="before")
    @classmethod
    def _sanitize_max_freezes(cls, value: Any) -> int | float:
        return resolve_max_freezes_per_week(value)

    @field_validator("freeze_penalty", mode="before")
    @classmethod
    def _sanitize_freeze_penalty(cls, value: Any) -> float:
        return resolve_freeze_penalty(value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this in tests to reset settings between test cases.
    After clearing, the next get_settings() call will create
    a fresh Settings instance with current environment variables.

    Example:
        def test_something(monkeypatch):
            monkeypatch.setenv("STREAK_FREEZE_DAYS", "2")
            clear_settings_cache()
            settings = get_settings()  # Fresh instance
    """
    get_settings.cache_clear()
