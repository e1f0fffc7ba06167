"""Completion metrics for habits.

This module provides:
- Total-days metric: entries as a share of days since tracking began,
  both over all time and over the displayed window
- Perfect days: days on which enough habits were completed

Neither metric uses streak freezes; they count raw entries only.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime

from services.calendar_days import date_range as days_ending_at
from services.calendar_days import days_between, parse_day


@dataclass(frozen=True)
class DaysMetric:
    """Entries over a span of days, pre-formatted for display."""

    fraction: str
    percentage: str
    entries: int
    completed_days: int

    @classmethod
    def empty(cls) -> "DaysMetric":
        return cls(fraction="0/0", percentage="0%", entries=0, completed_days=0)

    @classmethod
    def from_counts(cls, entries: int, total_days: int) -> "DaysMetric":
        percentage = f"{entries / total_days * 100:.1f}" if total_days > 0 else "0"
        return cls(
            fraction=f"{entries}/{total_days}",
            percentage=f"{percentage}%",
            entries=entries,
            completed_days=total_days,
        )


@dataclass(frozen=True)
class TotalDaysMetric:
    ever: DaysMetric
    displayed: DaysMetric


@dataclass(frozen=True)
class PerfectDays:
    all_days: int
    visible_days: int


def _utc_today() -> date:
    return datetime.now(UTC).date()


def calculate_total_days_metric(
    entries: Iterable[str] | None,
    date_range: Sequence[str] | None = None,
    today: date | None = None,
) -> TotalDaysMetric:
    """Share of days the habit was done, ever and within the displayed days.

    Ever covers the oldest entry through today, inclusive. The displayed
    span is the window itself, unless tracking started inside the window;
    then it runs from the first entry through today, so days before the
    habit existed don't count against it.
    """
    entry_set = set(entries or ())
    if not entry_set:
        return TotalDaysMetric(ever=DaysMetric.empty(), displayed=DaysMetric.empty())

    today = today or _utc_today()
    sorted_entries = sorted(entry_set)
    oldest_entry = parse_day(sorted_entries[0])

    total_days_ever = max(1, (today - oldest_entry).days + 1)
    ever = DaysMetric.from_counts(len(entry_set), total_days_ever)

    if not date_range:
        return TotalDaysMetric(ever=ever, displayed=DaysMetric.empty())

    sorted_range = sorted(date_range)
    start = parse_day(sorted_range[0])
    end = parse_day(sorted_range[-1])
    if oldest_entry > start:
        start = oldest_entry
        end = today

    total_days_displayed = max(1, (end - start).days + 1)
    visible = set(date_range)
    displayed_entries = sum(1 for entry in entry_set if entry in visible)

    return TotalDaysMetric(
        ever=ever,
        displayed=DaysMetric.from_counts(displayed_entries, total_days_displayed),
    )


def calculate_perfect_days(
    habits: Sequence[Iterable[str]] | None,
    percentage: float,
    date_range: Sequence[str] | None = None,
    today: date | None = None,
) -> PerfectDays:
    """Count days on which at least ``percentage`` % of habits were done.

    Args:
        habits: One collection of entry days per habit
        percentage: Required share of habits, 0-100 (rounded down to a
            whole number of habits)
        date_range: Displayed days, for the visible count
        today: Last day considered for the all-time count

    Returns:
        PerfectDays with the all-time and visible counts
    """
    if not habits:
        return PerfectDays(all_days=0, visible_days=0)

    threshold = math.floor((percentage / 100) * len(habits))
    habit_entries = [set(entries or ()) for entries in habits]

    all_entries = set().union(*habit_entries)
    if not all_entries:
        return PerfectDays(all_days=0, visible_days=0)

    today = today or _utc_today()
    oldest = min(all_entries)
    span = days_between(today, oldest) + 1
    all_dates = days_ending_at(today, span) if span > 0 else []

    all_counts = dict.fromkeys(all_dates, 0)
    visible_counts = dict.fromkeys(date_range or (), 0)

    for entries in habit_entries:
        for day in entries:
            if day in all_counts:
                all_counts[day] += 1
            if day in visible_counts:
                visible_counts[day] += 1

    return PerfectDays(
        all_days=sum(1 for count in all_counts.values() if count >= threshold),
        visible_days=sum(
            1 for count in visible_counts.values() if count >= threshold
        ),
    )
