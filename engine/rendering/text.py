"""Plain-text formatting for dates, counts and habit stats."""

from datetime import UTC, date, datetime

from services.calendar_days import parse_day
from services.habits_service import HabitStats, StatsReport


def pluralize(count: float, singular: str, plural: str | None = None) -> str:
    if count == 1:
        return singular
    return plural or singular + "s"


def render_pretty_date(day: str | date, today: date | None = None) -> str:
    """Format a day as ``"January 5, 2024"``, prefixed ``"Today, "`` for today."""
    parsed = parse_day(day)
    pretty = f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"

    if parsed == (today or datetime.now(UTC).date()):
        pretty = f"Today, {pretty}"

    return pretty


def format_streak(value: float) -> str:
    """Whole streaks print as ints; penalized ones keep up to two decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_habit_stats(stats: HabitStats) -> str:
    ever = format_streak(stats.longest_streak_ever)
    displayed = format_streak(stats.longest_streak_displayed)
    return (
        f"{stats.name}: "
        f"longest streak {ever} {pluralize(stats.longest_streak_ever, 'day')}"
        f" (shown: {displayed}), "
        f"done {stats.total_days.ever.fraction} days"
        f" ({stats.total_days.ever.percentage}), "
        f"shown {stats.total_days.displayed.fraction}"
        f" ({stats.total_days.displayed.percentage})"
    )


def format_stats_report(report: StatsReport, today: date | None = None) -> list[str]:
    """Lines printed by the stats command."""
    lines = [
        f"{render_pretty_date(report.start_date, today)}"
        f" - {render_pretty_date(report.end_date, today)}"
    ]
    lines.extend(format_habit_stats(stats) for stats in report.habits)

    perfect = report.perfect_days
    lines.append(
        f"Perfect days: {perfect.all_days} {pluralize(perfect.all_days, 'day')} ever,"
        f" {perfect.visible_days} shown"
    )
    return lines
