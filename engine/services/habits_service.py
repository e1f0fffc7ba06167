"""Habit file loading and per-habit stats.

Ties the engine together for a whole habit export: loads and validates
the habits, builds the displayed window, and runs the streak and
completion calculations for each habit with the configured leniency.
"""

import json
from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from core import get_logger
from core.config import Settings
from schemas import Habit
from services.calendar_days import date_range as days_ending_at
from services.freeze_service import FreezeConfig, compute_freeze_dates
from services.metrics_service import (
    PerfectDays,
    TotalDaysMetric,
    calculate_perfect_days,
    calculate_total_days_metric,
)
from services.streaks_service import (
    calculate_longest_streak_ever,
    calculate_longest_streak_in_range,
)

logger = get_logger(__name__)

_habit_list_adapter = TypeAdapter(list[Habit])


class HabitFileError(Exception):
    """Raised when a habit file can't be read or doesn't validate."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid habit file {path}: {reason}")


@dataclass(frozen=True)
class HabitStats:
    name: str
    longest_streak_ever: float
    longest_streak_displayed: float
    total_days: TotalDaysMetric


@dataclass(frozen=True)
class StatsReport:
    start_date: str
    end_date: str
    habits: list[HabitStats]
    perfect_days: PerfectDays


def parse_habits(data: object) -> list[Habit]:
    """Validate decoded habit data.

    Accepts either a list of ``{"name": ..., "entries": [...]}`` objects
    or a mapping of habit name to entry list.
    """
    if isinstance(data, dict):
        data = [{"name": name, "entries": entries} for name, entries in data.items()]
    return _habit_list_adapter.validate_python(data)


def load_habits(path: str | Path) -> list[Habit]:
    """Read and validate a JSON habit file.

    Raises:
        HabitFileError: If the file is missing, isn't JSON, or fails validation
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise HabitFileError(path, e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise HabitFileError(path, f"not valid JSON ({e.msg})") from e
    except UnicodeDecodeError as e:
        raise HabitFileError(path, "not valid UTF-8") from e

    try:
        habits = parse_habits(data)
    except ValidationError as e:
        raise HabitFileError(path, f"{e.error_count()} validation error(s)") from e

    logger.info("habits.loaded", path=str(path), habits=len(habits))
    return habits


def get_habit(habits: list[Habit], name: str) -> Habit | None:
    """Find a habit by name, ignoring case."""
    wanted = name.strip().lower()
    return next((h for h in habits if h.name.lower() == wanted), None)


def habit_freeze_dates(habit: Habit, config: FreezeConfig) -> list[str]:
    """Frozen days for a habit, oldest first."""
    return sorted(
        compute_freeze_dates(
            habit.entries, config.freeze_days, config.max_freezes_per_week
        )
    )


def summarize_habit(
    habit: Habit,
    config: FreezeConfig,
    date_range: list[str],
    today: date,
) -> HabitStats:
    return HabitStats(
        name=habit.name,
        longest_streak_ever=calculate_longest_streak_ever(
            habit.entries,
            config.freeze_days,
            config.max_freezes_per_week,
            config.freeze_penalty,
        ),
        longest_streak_displayed=calculate_longest_streak_in_range(
            habit.entries,
            date_range,
            config.freeze_days,
            config.max_freezes_per_week,
            config.freeze_penalty,
        ),
        total_days=calculate_total_days_metric(habit.entries, date_range, today),
    )


def summarize_habits(
    habits: list[Habit],
    settings: Settings,
    today: date | None = None,
) -> StatsReport:
    """Stats for every habit over a window of ``settings.display_days`` days.

    The window ends today; perfect days are counted across all habits.
    """
    today = today or datetime.now(UTC).date()
    config = FreezeConfig.from_settings(settings)
    window = days_ending_at(today, settings.display_days)

    stats = [summarize_habit(habit, config, window, today) for habit in habits]
    perfect_days = calculate_perfect_days(
        [habit.entries for habit in habits],
        settings.perfect_day_percentage,
        window,
        today,
    )

    logger.debug(
        "habits.summarized",
        habits=len(stats),
        start_date=window[0],
        end_date=window[-1],
        freeze_days=config.freeze_days,
        max_freezes_per_week=config.max_freezes_per_week,
        freeze_penalty=config.freeze_penalty,
    )
    return StatsReport(
        start_date=window[0],
        end_date=window[-1],
        habits=stats,
        perfect_days=perfect_days,
    )
