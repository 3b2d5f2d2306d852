"""Domain models for daily journal entries."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class HealthData:
    """Structured facts derived from a day's journal notes."""

    calories_consumed: int = 0
    calories_burned: int = 0
    exercise_minutes: int = 0
    weight: float | None = None
    fasting_hours: float = 0.0
    first_meal_time: str | None = None
    last_meal_time: str | None = None


@dataclass(frozen=True)
class TimedMealObservation:
    """A timestamped note line and whether it ends a fast."""

    time: str
    content: str
    breaks_fast: bool


@dataclass(frozen=True)
class JournalEntry:
    """Journal entry stored for a single calendar day."""

    day: date
    notes: str
    photos: list[str] = field(default_factory=list)
    health_data: HealthData = field(default_factory=HealthData)
    saved_at: datetime | None = None


def health_data_to_payload(data: HealthData) -> dict[str, object]:
    """Return the camelCase JSON payload for health data."""
    return {
        "caloriesConsumed": data.calories_consumed,
        "caloriesBurned": data.calories_burned,
        "exerciseMinutes": data.exercise_minutes,
        "weight": data.weight,
        "fastingHours": data.fasting_hours,
        "firstMealTime": data.first_meal_time,
        "lastMealTime": data.last_meal_time,
    }


def health_data_from_payload(payload: object) -> HealthData:
    """Build health data from a stored payload, filling defaults.

    Snapshots saved by older versions used ``calories`` and ``exercise`` keys.
    """
    if not isinstance(payload, dict) or not payload:
        return HealthData()
    consumed = payload.get("caloriesConsumed", payload.get("calories"))
    exercise = payload.get("exerciseMinutes", payload.get("exercise"))
    weight = payload.get("weight")
    return HealthData(
        calories_consumed=_as_int(consumed),
        calories_burned=_as_int(payload.get("caloriesBurned")),
        exercise_minutes=_as_int(exercise),
        weight=float(weight) if isinstance(weight, int | float) and weight else None,
        fasting_hours=_as_float(payload.get("fastingHours")),
        first_meal_time=_as_text(payload.get("firstMealTime")),
        last_meal_time=_as_text(payload.get("lastMealTime")),
    )


def _as_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    return int(value)


def _as_float(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    return float(value)


def _as_text(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None
