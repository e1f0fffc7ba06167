"""Streak freeze allocation.

A "freeze" forgives a missed day so it doesn't break a streak. This module
decides which missed days get frozen and answers questions about the gap
between two completed days.

FREEZE RULES:
- Only gaps of 1..freeze_days missed days between two entries can be frozen
- A gap is frozen as a whole or not at all
- With a weekly quota, no trailing 7-day window may hold more than
  max_freezes_per_week frozen days
- Gaps are allocated oldest first; earlier gaps use up quota that later
  gaps then can't have. This is not a global optimum and must stay that
  way, since streak results depend on it.
"""

from collections import deque
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING

from core import get_logger
from services.calendar_days import get_date_as_string, parse_day

if TYPE_CHECKING:
    from core.config import Settings

logger = get_logger(__name__)

QUOTA_WINDOW_DAYS = 7


@dataclass(frozen=True)
class FreezeConfig:
    """Leniency parameters for one streak calculation.

    All zero means no freezes: gaps always break a streak.
    """

    freeze_days: int = 0
    max_freezes_per_week: int = 0
    freeze_penalty: float = 0

    @classmethod
    def from_settings(cls, settings: "Settings") -> "FreezeConfig":
        return cls(
            freeze_days=settings.streak_freeze_days,
            max_freezes_per_week=settings.max_freezes_per_week,
            freeze_penalty=settings.freeze_penalty,
        )


def _count_within_window(
    days: Iterable[date], window_start: date, target: date
) -> int:
    return sum(1 for day in days if window_start <= day <= target)


def compute_freeze_dates(
    entries: Iterable[str] | None,
    freeze_days: int = 0,
    max_freezes_per_week: int = 0,
) -> set[str]:
    """Work out which missed days are frozen for a habit.

    Args:
        entries: Days the habit was completed (any order, canonical strings)
        freeze_days: Longest gap, in missed days, that may be frozen
        max_freezes_per_week: Freeze quota per rolling week (0 = no cap)

    Returns:
        The set of frozen days. Empty when there are fewer than two
        entries or freezing is disabled.
    """
    freeze_set: set[str] = set()
    if not entries or freeze_days <= 0:
        return freeze_set

    sorted_entries = sorted(entries)
    if len(sorted_entries) < 2:
        return freeze_set

    max_weekly = max(0, max_freezes_per_week or 0)
    # Committed freezes inside the current quota window, oldest first
    committed: deque[date] = deque()

    for prev_day, next_day in zip(sorted_entries, sorted_entries[1:]):
        current = parse_day(prev_day)
        gap = (parse_day(next_day) - current).days - 1

        if gap <= 0 or gap > freeze_days:
            continue

        tentative: list[date] = []
        can_bridge = True

        for offset in range(1, gap + 1):
            freeze_date = current + timedelta(days=offset)

            if max_weekly:
                window_start = freeze_date - timedelta(days=QUOTA_WINDOW_DAYS - 1)
                while committed and committed[0] < window_start:
                    committed.popleft()

                committed_count = _count_within_window(
                    committed, window_start, freeze_date
                )
                tentative_count = _count_within_window(
                    tentative, window_start, freeze_date
                )
                if committed_count + tentative_count >= max_weekly:
                    can_bridge = False
                    break

            tentative.append(freeze_date)

        if not can_bridge:
            logger.debug(
                "freeze.gap_rejected",
                start=prev_day,
                end=next_day,
                gap=gap,
                max_freezes_per_week=max_weekly,
            )
            continue

        for freeze_date in tentative:
            committed.append(freeze_date)
            freeze_set.add(get_date_as_string(freeze_date))

    return freeze_set


def is_gap_frozen(start: str, end: str, freeze_set: Collection[str]) -> bool:
    """True if ``end`` continues a streak that ticked on ``start``.

    Consecutive days always continue. Further apart, every day strictly
    in between must be frozen. Same-day or reversed pairs never do.
    """
    start_day = parse_day(start)
    diff = (parse_day(end) - start_day).days

    if diff <= 1:
        return diff == 1

    for offset in range(1, diff):
        intermediate = get_date_as_string(start_day + timedelta(days=offset))
        if intermediate not in freeze_set:
            return False

    return True


def count_frozen_days(start: str, end: str, freeze_set: Collection[str]) -> int:
    """Number of frozen days strictly between ``start`` and ``end``."""
    start_day = parse_day(start)
    diff = (parse_day(end) - start_day).days
    if diff <= 1:
        return 0
    return sum(
        1
        for offset in range(1, diff)
        if get_date_as_string(start_day + timedelta(days=offset)) in freeze_set
    )
