#!/usr/bin/env python3
"""CLI for habit tracker statistics.

Usage:
    python -m cli <command>

Commands:
    stats    Print streaks, completion rates and perfect days for a habit file
    freezes  List the frozen days of one habit
"""

import argparse
import sys
from datetime import UTC, datetime

from pydantic import ValidationError

from core import bind_contextvars, clear_contextvars, debug_log, get_logger
from core.config import Settings, get_settings
from core.leniency import (
    resolve_freeze_penalty,
    resolve_max_freezes_per_week,
    resolve_streak_freeze_days,
)
from core.logger import configure_logging
from rendering import format_stats_report, pluralize, render_pretty_date
from schemas import StatsReportResponse
from services.calendar_days import InvalidDayError, parse_day
from services.freeze_service import FreezeConfig
from services.habits_service import (
    HabitFileError,
    get_habit,
    habit_freeze_dates,
    load_habits,
    summarize_habits,
)

logger = get_logger(__name__)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Layer CLI flags over environment settings, sanitizing leniency values."""
    overrides: dict[str, object] = {}
    if args.freeze_days is not None:
        overrides["streak_freeze_days"] = resolve_streak_freeze_days(
            args.freeze_days, settings.streak_freeze_days
        )
    if args.max_freezes_per_week is not None:
        overrides["max_freezes_per_week"] = resolve_max_freezes_per_week(
            args.max_freezes_per_week, settings.max_freezes_per_week
        )
    if args.freeze_penalty is not None:
        overrides["freeze_penalty"] = resolve_freeze_penalty(
            args.freeze_penalty, settings.freeze_penalty
        )
    if getattr(args, "display_days", None) is not None:
        overrides["display_days"] = max(1, args.display_days)
    if getattr(args, "perfect_day_percentage", None) is not None:
        overrides["perfect_day_percentage"] = min(
            100.0, max(0.0, args.perfect_day_percentage)
        )
    if not overrides:
        return settings
    return settings.model_copy(update=overrides)


def cmd_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Print stats for every habit in the file."""
    today = parse_day(args.today) if args.today else datetime.now(UTC).date()
    habits = load_habits(args.habits_file)

    report = summarize_habits(habits, settings, today=today)
    debug_log(
        f"Summarized {len(habits)} {pluralize(len(habits), 'habit')}",
        settings.debug_level,
        plugin_name=settings.plugin_name,
    )

    if args.json:
        print(StatsReportResponse.model_validate(report).model_dump_json(indent=2))
        return 0

    for line in format_stats_report(report, today):
        print(line)
    return 0


def cmd_freezes(args: argparse.Namespace, settings: Settings) -> int:
    """Print the frozen days of one habit."""
    today = parse_day(args.today) if args.today else datetime.now(UTC).date()
    habits = load_habits(args.habits_file)
    habit = get_habit(habits, args.habit)
    if habit is None:
        logger.warning("habit.not_found", habit=args.habit, path=args.habits_file)
        return 1

    frozen = habit_freeze_dates(habit, FreezeConfig.from_settings(settings))
    debug_log(
        {"habit": habit.name, "frozen": frozen},
        settings.debug_level,
        plugin_name=settings.plugin_name,
    )

    print(f"{habit.name}: {len(frozen)} frozen {pluralize(len(frozen), 'day')}")
    for day in frozen:
        print(f"  {render_pretty_date(day, today)}")
    return 0


def _add_leniency_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("habits_file", help="JSON file of habits and their entries")
    parser.add_argument(
        "--freeze-days",
        help="Longest gap of missed days that can be frozen",
    )
    parser.add_argument(
        "--max-freezes-per-week",
        help="Frozen days allowed in any 7-day window (0 = no cap)",
    )
    parser.add_argument(
        "--freeze-penalty",
        help="Streak length lost per frozen day",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Habit tracker statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    stats_parser = subparsers.add_parser(
        "stats",
        help="Print streaks, completion rates and perfect days",
    )
    _add_leniency_flags(stats_parser)
    stats_parser.add_argument("--today", help="Treat this day as today (YYYY-MM-DD)")
    stats_parser.add_argument(
        "--display-days", type=int, help="Days shown, ending today"
    )
    stats_parser.add_argument(
        "--perfect-day-percentage",
        type=float,
        help="Share of habits (0-100) needed for a perfect day",
    )
    stats_parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON"
    )

    freezes_parser = subparsers.add_parser(
        "freezes",
        help="List the frozen days of one habit",
    )
    _add_leniency_flags(freezes_parser)
    freezes_parser.add_argument("--habit", required=True, help="Habit name")
    freezes_parser.add_argument("--today", help="Treat this day as today (YYYY-MM-DD)")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging()
        logger.error("settings.invalid", errors=e.error_count(), error=str(e))
        return 1
    configure_logging(settings.log_level, settings.log_format == "json")

    if args.command not in ("stats", "freezes"):
        parser.print_help()
        return 1

    settings = _apply_overrides(settings, args)
    bind_contextvars(command=args.command)
    try:
        if args.command == "stats":
            return cmd_stats(args, settings)
        return cmd_freezes(args, settings)
    except (HabitFileError, InvalidDayError) as e:
        logger.error("habits.load_failed", error=str(e))
        return 1
    finally:
        clear_contextvars()


if __name__ == "__main__":
    sys.exit(main())
