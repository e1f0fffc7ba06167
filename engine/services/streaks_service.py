"""Longest-streak calculation with streak freezes.

Two reducers share the same tick rule. When an entry follows the previous
ticked entry across a fully frozen gap, the streak grows by one minus the
freeze penalty for each frozen day in between (never dropping below 1).
Any unfrozen gap restarts the streak at 1.

- calculate_longest_streak_in_range walks a displayed window day by day,
  so a frozen day inside the window keeps the streak alive, while any other
  missed day drops it to 0
- calculate_longest_streak_ever only looks at entry-to-entry transitions
"""

from collections.abc import Collection, Iterable, Sequence

from services.freeze_service import (
    compute_freeze_dates,
    count_frozen_days,
    is_gap_frozen,
)


def _tick(
    current_streak: float,
    last_tick_date: str,
    day: str,
    freeze_dates: Collection[str],
    penalty: float,
) -> float:
    """Streak length after ticking ``day`` with ``last_tick_date`` before it."""
    if not is_gap_frozen(last_tick_date, day, freeze_dates):
        return 1

    frozen_days = (
        count_frozen_days(last_tick_date, day, freeze_dates) if penalty else 0
    )
    return max(1, current_streak + 1 - penalty * frozen_days)


def calculate_longest_streak_in_range(
    entries: Iterable[str] | None,
    date_range: Sequence[str] | None,
    freeze_days: int = 0,
    max_freezes_per_week: int = 0,
    freeze_penalty: float = 0,
) -> float:
    """Longest streak visible inside a displayed window of days.

    Args:
        entries: Days the habit was completed
        date_range: Displayed days, oldest first (not re-sorted here)
        freeze_days: Longest gap, in missed days, that may be frozen
        max_freezes_per_week: Freeze quota per rolling week (0 = no cap)
        freeze_penalty: Streak cost per frozen day bridged

    Returns:
        The longest streak, 0 if there are no entries or no days shown.
    """
    entry_set = set(entries or ())
    if not entry_set or not date_range:
        return 0

    freeze_dates = compute_freeze_dates(entry_set, freeze_days, max_freezes_per_week)
    penalty = max(0, freeze_penalty or 0)

    max_streak: float = 0
    current_streak: float = 0
    last_tick_date: str | None = None

    for day in date_range:
        if day in entry_set:
            if last_tick_date is None:
                current_streak = 1
            else:
                current_streak = _tick(
                    current_streak, last_tick_date, day, freeze_dates, penalty
                )
            max_streak = max(max_streak, current_streak)
            last_tick_date = day
        elif day not in freeze_dates:
            current_streak = 0
            last_tick_date = None

    return max_streak


def calculate_longest_streak_ever(
    entries: Iterable[str] | None,
    freeze_days: int = 0,
    max_freezes_per_week: int = 0,
    freeze_penalty: float = 0,
) -> float:
    """Longest streak across the whole entry history.

    Returns:
        The longest streak, 0 for no entries and 1 for a single entry.
    """
    # Duplicate entries carry no meaning, only membership does
    sorted_entries = sorted(set(entries or ()))
    if not sorted_entries:
        return 0

    freeze_dates = compute_freeze_dates(
        sorted_entries, freeze_days, max_freezes_per_week
    )
    penalty = max(0, freeze_penalty or 0)

    max_streak: float = 1
    current_streak: float = 1

    for prev_day, day in zip(sorted_entries, sorted_entries[1:]):
        current_streak = _tick(current_streak, prev_day, day, freeze_dates, penalty)
        max_streak = max(max_streak, current_streak)

    return max_streak
