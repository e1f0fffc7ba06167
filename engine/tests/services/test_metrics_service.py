"""Tests for metrics_service.

Uses explicit ``today`` arguments for most cases and time_machine where the
default (current UTC date) matters.
"""

from datetime import UTC, date, datetime

import pytest
import time_machine

from services.calendar_days import date_range
from services.metrics_service import (
    DaysMetric,
    PerfectDays,
    TotalDaysMetric,
    calculate_perfect_days,
    calculate_total_days_metric,
)

pytestmark = pytest.mark.unit

FROZEN_DATE = datetime(2024, 1, 10, 12, 0, 0, tzinfo=UTC)


class TestDaysMetric:
    def test_empty(self):
        assert DaysMetric.empty() == DaysMetric("0/0", "0%", 0, 0)

    def test_one_decimal_percentage(self):
        metric = DaysMetric.from_counts(1, 3)
        assert metric.fraction == "1/3"
        assert metric.percentage == "33.3%"

    def test_zero_days(self):
        assert DaysMetric.from_counts(0, 0).percentage == "0%"


class TestCalculateTotalDaysMetric:
    @pytest.mark.parametrize("entries", [None, []], ids=["none", "empty"])
    def test_no_entries(self, entries):
        result = calculate_total_days_metric(entries, date_range("2024-01-10", 7))
        assert result == TotalDaysMetric(DaysMetric.empty(), DaysMetric.empty())

    def test_ever_counts_from_oldest_entry_to_today(self):
        entries = ["2024-01-01", "2024-01-03", "2024-01-05"]
        result = calculate_total_days_metric(entries, today=date(2024, 1, 10))

        assert result.ever.fraction == "3/10"
        assert result.ever.percentage == "30.0%"
        assert result.ever.entries == 3
        assert result.ever.completed_days == 10

    def test_no_range_leaves_displayed_empty(self):
        result = calculate_total_days_metric(["2024-01-01"], today=date(2024, 1, 2))
        assert result.displayed == DaysMetric.empty()

    def test_displayed_uses_window_when_tracking_started_before_it(self):
        entries = ["2024-01-01", "2024-01-03", "2024-01-05"]
        window = date_range("2024-01-10", 7)  # Jan 4..Jan 10

        result = calculate_total_days_metric(entries, window, date(2024, 1, 10))

        assert result.displayed.fraction == "1/7"
        assert result.displayed.percentage == "14.3%"

    def test_displayed_starts_at_first_entry_inside_window(self):
        entries = ["2024-01-08", "2024-01-09"]
        window = date_range("2024-01-10", 7)

        result = calculate_total_days_metric(entries, window, date(2024, 1, 12))

        # Jan 8 .. today (Jan 12)
        assert result.displayed.fraction == "2/5"
        assert result.displayed.percentage == "40.0%"
        assert result.ever.fraction == "2/5"

    def test_duplicates_counted_once(self):
        entries = ["2024-01-01", "2024-01-01", "2024-01-02"]
        result = calculate_total_days_metric(entries, today=date(2024, 1, 2))
        assert result.ever.fraction == "2/2"
        assert result.ever.percentage == "100.0%"

    def test_future_entry_counts_at_least_one_day(self):
        result = calculate_total_days_metric(["2024-02-01"], today=date(2024, 1, 1))
        assert result.ever.fraction == "1/1"

    @time_machine.travel(FROZEN_DATE, tick=False)
    def test_today_defaults_to_utc_date(self):
        result = calculate_total_days_metric(["2024-01-01"])
        assert result.ever.fraction == "1/10"


class TestCalculatePerfectDays:
    HABITS = [
        ["2024-01-01", "2024-01-02"],
        ["2024-01-02", "2024-01-03"],
    ]
    TODAY = date(2024, 1, 4)

    @pytest.mark.parametrize(
        "habits",
        [None, [], [[], []]],
        ids=["none", "no_habits", "no_entries"],
    )
    def test_nothing_to_count(self, habits):
        assert calculate_perfect_days(habits, 100, ["2024-01-01"]) == PerfectDays(0, 0)

    def test_all_habits_required(self):
        result = calculate_perfect_days(
            self.HABITS, 100, ["2024-01-02", "2024-01-03"], self.TODAY
        )
        assert result == PerfectDays(all_days=1, visible_days=1)

    def test_half_of_habits_required(self):
        result = calculate_perfect_days(
            self.HABITS, 50, ["2024-01-02", "2024-01-03"], self.TODAY
        )
        assert result == PerfectDays(all_days=3, visible_days=2)

    def test_zero_percent_makes_every_day_perfect(self):
        result = calculate_perfect_days(
            self.HABITS, 0, ["2024-01-02", "2024-01-03"], self.TODAY
        )
        # Jan 1 .. Jan 4 inclusive
        assert result == PerfectDays(all_days=4, visible_days=2)

    def test_threshold_rounds_down(self):
        habits = [["2024-01-01"], ["2024-01-02"], ["2024-01-02"]]
        # 50% of 3 habits -> 1 habit needed
        result = calculate_perfect_days(habits, 50, None, date(2024, 1, 2))
        assert result == PerfectDays(all_days=2, visible_days=0)

    def test_entries_after_today_not_counted(self):
        habits = [["2024-01-01", "2024-01-09"]]
        result = calculate_perfect_days(habits, 100, None, date(2024, 1, 2))
        assert result.all_days == 1

    def test_visible_days_ignore_window_duplicates(self):
        result = calculate_perfect_days(
            self.HABITS, 100, ["2024-01-02", "2024-01-02"], self.TODAY
        )
        assert result.visible_days == 1

    @time_machine.travel(FROZEN_DATE, tick=False)
    def test_today_defaults_to_utc_date(self):
        result = calculate_perfect_days([["2024-01-01"]], 0)
        assert result.all_days == 10
