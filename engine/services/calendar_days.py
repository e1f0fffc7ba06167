"""Calendar day helpers.

Days travel through the engine as canonical ``YYYY-MM-DD`` strings. Those
compare lexicographically in chronological order, so sorting a list of them
sorts it by date, and they hash cleanly into entry and freeze sets.
Arithmetic is done on ``datetime.date`` and converted back.
"""

from datetime import date, datetime, timedelta

DAY_FORMAT = "%Y-%m-%d"


class InvalidDayError(ValueError):
    """Raised when a value can't be read as a calendar day."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid calendar day: {value!r}")


def parse_day(value: str | date | datetime) -> date:
    """Read a day string (or date/datetime) as a ``date``.

    Strings may carry a time component (``2024-01-05T08:30:00``); only
    the calendar day is kept.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDayError(value)
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError as e:
        raise InvalidDayError(value) from e


def get_date_as_string(value: str | date | datetime) -> str:
    """Normalize a day to its canonical ``YYYY-MM-DD`` form."""
    return parse_day(value).strftime(DAY_FORMAT)


def days_between(later: str | date, earlier: str | date) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return (parse_day(later) - parse_day(earlier)).days


def add_days(day: str | date, offset: int) -> str:
    return get_date_as_string(parse_day(day) + timedelta(days=offset))


def get_day_of_the_week(day: str | date) -> str:
    """Lowercase English weekday name, e.g. ``"monday"``."""
    return parse_day(day).strftime("%A").lower()


def date_range(end: str | date, days: int) -> list[str]:
    """The ``days`` consecutive days ending at ``end``, oldest first."""
    last = parse_day(end)
    return [
        get_date_as_string(last - timedelta(days=offset))
        for offset in range(days - 1, -1, -1)
    ]
