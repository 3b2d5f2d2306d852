"""Domain models for the user profile."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class ActivityLevel(Enum):
    """Activity levels with their TDEE multipliers."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


@dataclass(frozen=True)
class ProfileInput:
    """User-supplied profile fields before derived values are computed."""

    sex: str
    weight: float
    activity_level: str | None = None
    age: int | None = None
    birth_date: date | None = None
    height_feet: int | None = None
    height_inches: int | None = None


@dataclass(frozen=True)
class UserProfile:
    """The single user's profile with derived energy figures."""

    age: int
    sex: str
    height_feet: int
    height_inches: int
    weight: float
    activity_level: str | None
    bmr: float
    tdee: float
    calorie_target: float
    updated_at: datetime
    birth_date: date | None = None
