"""Supabase repository for the single user profile."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from supabase import Client

from health_journal.domain.profile import UserProfile
from health_journal.services.profile import ProfileRepository

PROFILE_ROW_ID = 1


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation storing the profile as one fixed-id row."""

    client: Client
    table_name: str = "user_profile"

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile row, if present."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("id", PROFILE_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_profile(self, profile: UserProfile) -> None:
        """Replace every column of the profile row."""
        self.client.table(self.table_name).upsert(
            {
                "id": PROFILE_ROW_ID,
                "age": profile.age,
                "birth_date": (
                    profile.birth_date.isoformat() if profile.birth_date else None
                ),
                "sex": profile.sex,
                "height_feet": profile.height_feet,
                "height_inches": profile.height_inches,
                "weight": profile.weight,
                "activity_level": profile.activity_level,
                "bmr": profile.bmr,
                "tdee": profile.tdee,
                "calorie_target": profile.calorie_target,
                "updated_at": profile.updated_at.isoformat(),
            },
            on_conflict="id",
        ).execute()


def _parse_row(row: dict[str, object]) -> UserProfile:
    birth_date_raw = row.get("birth_date")
    updated_at_raw = row.get("updated_at")
    return UserProfile(
        age=int(row.get("age") or 0),
        sex=str(row.get("sex") or ""),
        height_feet=int(row.get("height_feet") or 0),
        height_inches=int(row.get("height_inches") or 0),
        weight=float(row.get("weight") or 0.0),
        activity_level=row.get("activity_level"),
        bmr=float(row.get("bmr") or 0.0),
        tdee=float(row.get("tdee") or 0.0),
        calorie_target=float(row.get("calorie_target") or 0.0),
        updated_at=(
            datetime.fromisoformat(updated_at_raw)
            if isinstance(updated_at_raw, str) and updated_at_raw
            else datetime.min.replace(tzinfo=UTC)
        ),
        birth_date=(
            date.fromisoformat(birth_date_raw)
            if isinstance(birth_date_raw, str) and birth_date_raw
            else None
        ),
    )
