"""Domain models for period summaries and progress."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PeriodSummary:
    """Aggregated health facts over a date range."""

    avg_calories_consumed: int
    avg_calories_burned: int
    total_exercise_minutes: int
    avg_fasting_hours: float
    weight_change: float | None
    current_weight: float | None
    days_tracked: int
    calorie_target: int | None
    total_deficit: int
    avg_daily_deficit: int
    total_net_deficit: int
    avg_daily_net_deficit: int


@dataclass(frozen=True)
class OverallProgress:
    """Weight progress across every weigh-in on record."""

    start_weight: float
    current_weight: float
    total_change: float
    start_date: date
    current_date: date
    days_between: int
    total_weigh_ins: int


@dataclass(frozen=True)
class InsufficientProgress:
    """Returned when there are too few weigh-ins to report progress."""

    message: str
    entries: int
