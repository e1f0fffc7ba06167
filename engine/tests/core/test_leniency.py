"""Unit tests for core.leniency sanitizers."""

import pytest

from core.leniency import (
    resolve_freeze_penalty,
    resolve_max_freezes_per_week,
    resolve_streak_freeze_days,
)

pytestmark = pytest.mark.unit


class TestResolveStreakFreezeDays:
    @pytest.mark.parametrize(
        "value,expected",
        [(3, 3), (2.9, 2), ("4", 4), (0, 0), (True, 1)],
        ids=["int", "float_floored", "numeric_string", "zero", "bool"],
    )
    def test_accepts_non_negative_numbers(self, value, expected):
        assert resolve_streak_freeze_days(value) == expected

    @pytest.mark.parametrize(
        "value",
        [-1, "-2", "two", None, float("nan"), float("inf"), [3]],
        ids=["negative", "negative_string", "word", "none", "nan", "inf", "list"],
    )
    def test_invalid_values_fall_back_to_default(self, value):
        assert resolve_streak_freeze_days(value, 2) == 2

    def test_negative_default_clamped_to_zero(self):
        assert resolve_streak_freeze_days("bad", -5) == 0

    def test_missing_default_is_zero(self):
        assert resolve_streak_freeze_days(None, None) == 0


class TestResolveMaxFreezesPerWeek:
    def test_floors_to_int(self):
        assert resolve_max_freezes_per_week("1.99") == 1

    def test_zero_means_no_cap_and_is_kept(self):
        assert resolve_max_freezes_per_week(0, 3) == 0

    def test_invalid_falls_back(self):
        assert resolve_max_freezes_per_week(-1, 2) == 2


class TestResolveFreezePenalty:
    def test_keeps_fraction(self):
        assert resolve_freeze_penalty("0.25") == 0.25

    def test_invalid_falls_back(self):
        assert resolve_freeze_penalty("x", 0.5) == 0.5

    def test_negative_falls_back_to_zero(self):
        assert resolve_freeze_penalty(-1) == 0
