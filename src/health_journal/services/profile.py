"""User profile service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol

from health_journal.domain.profile import ProfileInput, UserProfile
from health_journal.services.energy import (
    age_on,
    calculate_bmr,
    calculate_calorie_target,
    calculate_tdee,
    total_height_inches,
)

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the single user profile."""

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: UserProfile) -> None:
        """Replace the stored profile."""


def _today() -> date:
    return datetime.now(tz=UTC).date()


@dataclass
class ProfileService:
    """Service for reading and replacing the user profile."""

    repository: ProfileRepository
    default_calorie_target: float | None = None
    today: Callable[[], date] = field(default=_today)

    def get_profile(self) -> UserProfile | None:
        """Return the current profile."""
        return self.repository.get_profile()

    def update_profile(self, profile_input: ProfileInput) -> UserProfile:
        """Compute energy figures and replace the stored profile."""
        age = resolve_age(profile_input, self.today())
        height = total_height_inches(
            profile_input.height_feet, profile_input.height_inches
        )
        bmr = calculate_bmr(age, profile_input.sex, height, profile_input.weight)
        tdee = calculate_tdee(bmr, profile_input.activity_level)
        profile = UserProfile(
            age=age,
            sex=profile_input.sex,
            height_feet=profile_input.height_feet or 0,
            height_inches=profile_input.height_inches or 0,
            weight=profile_input.weight,
            activity_level=profile_input.activity_level,
            bmr=bmr,
            tdee=tdee,
            calorie_target=calculate_calorie_target(tdee),
            updated_at=datetime.now(tz=UTC),
            birth_date=profile_input.birth_date,
        )
        self.repository.save_profile(profile)
        logger.info("Updated profile, calorie target %.0f", profile.calorie_target)
        return profile

    def calorie_target(self) -> float | None:
        """Return the profile's calorie target or the configured default."""
        try:
            profile = self.repository.get_profile()
        except Exception:
            logger.warning("Profile lookup failed, using default", exc_info=True)
            return self.default_calorie_target
        if profile is not None:
            return profile.calorie_target
        return self.default_calorie_target


def resolve_age(profile_input: ProfileInput, today: date) -> int:
    """Return the explicit age, else the age derived from the birth date."""
    if profile_input.age is not None:
        return profile_input.age
    if profile_input.birth_date is not None:
        return age_on(profile_input.birth_date, today)
    raise ValueError("Either age or birth_date is required")
