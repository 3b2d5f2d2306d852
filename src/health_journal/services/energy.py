"""Energy expenditure estimates from a user profile."""

from datetime import date

from health_journal.domain.profile import ActivityLevel

KG_PER_LB = 0.453592
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12
DAILY_DEFICIT = 500

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}
DEFAULT_MULTIPLIER = ACTIVITY_MULTIPLIERS[ActivityLevel.SEDENTARY]


def calculate_bmr(age: int, sex: str, height_inches: float, weight_lbs: float) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation."""
    weight_kg = weight_lbs * KG_PER_LB
    height_cm = height_inches * CM_PER_INCH
    offset = 5 if sex.strip().lower() == "male" else -161
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + offset


def activity_multiplier(activity_level: str | None) -> float:
    """Return the TDEE multiplier, defaulting to sedentary."""
    try:
        level = ActivityLevel(activity_level)
    except ValueError:
        return DEFAULT_MULTIPLIER
    return ACTIVITY_MULTIPLIERS[level]


def calculate_tdee(bmr: float, activity_level: str | None) -> float:
    """Return total daily energy expenditure for an activity level."""
    return bmr * activity_multiplier(activity_level)


def calculate_calorie_target(tdee: float) -> float:
    """Return the daily intake target for steady weight loss."""
    return tdee - DAILY_DEFICIT


def total_height_inches(feet: int | None, inches: int | None) -> int:
    """Combine feet and inches, treating missing parts as zero."""
    return (feet or 0) * INCHES_PER_FOOT + (inches or 0)


def age_on(birth_date: date, today: date) -> int:
    """Return completed years of age on ``today``."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age
