"""Sanitizers for raw leniency settings.

Freeze settings arrive from environment variables, ``.env`` files and CLI
flags, so they may be strings, blanks, negatives or garbage. Each resolver
turns a raw value into a non-negative number the streak engine can trust,
falling back to a default when the raw value is unusable.
"""

import math
from typing import Any


def _parse_number(value: Any) -> float | None:
    """Parse a raw value as a finite number, or None if it isn't one."""
    if value is None:
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def _fallback(default_value: float | None) -> float:
    return max(0, default_value or 0)


def resolve_streak_freeze_days(value: Any, default_value: int = 0) -> int | float:
    """Max gap length (in missed days) that can be frozen, floored to an int."""
    parsed = _parse_number(value)
    if parsed is not None and parsed >= 0:
        return math.floor(parsed)
    return _fallback(default_value)


def resolve_freeze_penalty(value: Any, default_value: float = 0) -> float:
    """Streak cost per frozen day. Fractions are kept."""
    parsed = _parse_number(value)
    if parsed is not None and parsed >= 0:
        return parsed
    return _fallback(default_value)


def resolve_max_freezes_per_week(value: Any, default_value: int = 0) -> int | float:
    """Weekly freeze quota, floored to an int. 0 means no cap."""
    parsed = _parse_number(value)
    if parsed is not None and parsed >= 0:
        return math.floor(parsed)
    return _fallback(default_value)
