"""Pytest configuration and shared fixtures.

This module provides:
- Settings isolation (cache cleared, leniency env vars unset)
- Root logger / structlog state restore around each test
- Habit file factory for service and CLI tests
"""

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

from core.config import clear_settings_cache
from core.logger import DEBUG_LOGGER_NAME

SETTINGS_ENV_VARS = (
    "PLUGIN_NAME",
    "DEBUG_LEVEL",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "STREAK_FREEZE_DAYS",
    "MAX_FREEZES_PER_WEEK",
    "FREEZE_PENALTY",
    "DISPLAY_DAYS",
    "PERFECT_DAY_PERCENTAGE",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Start every test from default settings."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def _clean_root_logger() -> Generator[None, None, None]:
    """Save and restore root logger state around each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    debug_logger = logging.getLogger(DEBUG_LOGGER_NAME)
    original_debug_level = debug_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    debug_logger.setLevel(original_debug_level)
    structlog.reset_defaults()


@pytest.fixture
def habit_file(tmp_path: Path) -> Callable[[object], Path]:
    """Write habit data to a JSON file and return its path."""

    def _write(data: object, name: str = "habits.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
