"""Rendering module for presentation concerns.

This module handles all text output for the CLI:
- Pretty dates and pluralized counts
- Per-habit stats lines

This separates presentation concerns from the calculations in services.
"""

from rendering.text import (
    format_habit_stats,
    format_stats_report,
    format_streak,
    pluralize,
    render_pretty_date,
)

__all__ = [
    "format_habit_stats",
    "format_stats_report",
    "format_streak",
    "pluralize",
    "render_pretty_date",
]
