"""Pydantic schemas for habit file input and stats output."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.calendar_days import get_date_as_string


class Habit(BaseModel):
    """One habit and the days it was completed."""

    name: str = Field(min_length=1, max_length=200)
    entries: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Habit name cannot be empty")
        return v

    @field_validator("entries")
    @classmethod
    def normalize_entries(cls, v: list[str]) -> list[str]:
        """Normalize to canonical days, dropping duplicates, oldest first."""
        return sorted({get_date_as_string(day) for day in v})


class DaysMetricResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fraction: str
    percentage: str
    entries: int
    completed_days: int


class TotalDaysMetricResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ever: DaysMetricResponse
    displayed: DaysMetricResponse


class HabitStatsResponse(BaseModel):
    """Stats for a single habit."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    longest_streak_ever: float
    longest_streak_displayed: float
    total_days: TotalDaysMetricResponse


class PerfectDaysResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    all_days: int
    visible_days: int


class StatsReportResponse(BaseModel):
    """Everything the stats command reports."""

    model_config = ConfigDict(from_attributes=True)

    start_date: str
    end_date: str
    habits: list[HabitStatsResponse]
    perfect_days: PerfectDaysResponse
