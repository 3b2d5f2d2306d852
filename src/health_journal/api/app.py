"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime

from fastapi import FastAPI, HTTPException, Request, status

from health_journal.api.models import EntryRequest, ProfileRequest
from health_journal.app_logging import configure_logging
from health_journal.containers import AppContainer
from health_journal.domain.journal import JournalEntry, health_data_to_payload
from health_journal.domain.profile import ProfileInput, UserProfile
from health_journal.domain.summary import (
    InsufficientProgress,
    OverallProgress,
    PeriodSummary,
)
from health_journal.services.summary import round_half_up


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Health journal API starting (%s)", container.settings.environment
        )
        yield
        logger.info("Health journal API stopped")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok", "timestamp": datetime.now(tz=UTC).isoformat()}

    @app.get("/api/entries")
    async def list_entries(request: Request) -> dict[str, object]:
        """Return every entry keyed by date, newest first."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.journal_service.list_entries()
        return {entry.day.isoformat(): _entry_payload(entry) for entry in entries}

    @app.get("/api/entries/{day}")
    async def get_entry(day: date, request: Request) -> dict[str, object]:
        """Return the entry for a date."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.journal_service.get_entry(day)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found"
            )
        return _entry_payload(entry)

    @app.post("/api/entries/{day}")
    async def save_entry(
        day: date, body: EntryRequest, request: Request
    ) -> dict[str, object]:
        """Save a day's entry, deleting it when notes and photos are empty."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.journal_service.save_entry(
            day, body.notes, body.photos
        )
        if entry is None:
            return {"message": "Entry deleted"}
        return {"message": "Entry saved", "entry": _entry_payload(entry)}

    @app.get("/api/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the user profile, or an empty object when unset."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile()
        return _profile_payload(profile) if profile else {}

    @app.post("/api/profile")
    async def update_profile(
        body: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Replace the user profile and return its energy figures."""
        state_container: AppContainer = request.app.state.container
        try:
            profile = state_container.profile_service.update_profile(
                ProfileInput(**body.model_dump())
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return _profile_payload(profile)

    @app.get("/api/summary/week/{day}")
    async def week_summary(day: date, request: Request) -> dict[str, object]:
        """Return the Monday-to-Sunday summary containing a date."""
        state_container: AppContainer = request.app.state.container
        return _summary_payload(state_container.summary_service.get_week(day))

    @app.get("/api/summary/month/{year}/{month}")
    async def month_summary(
        year: int, month: int, request: Request
    ) -> dict[str, object]:
        """Return the summary for a calendar month."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.summary_service.get_month(year, month)
        return _summary_payload(summary)

    @app.get("/api/summary/overall")
    async def overall_summary(request: Request) -> dict[str, object]:
        """Return weight progress across all entries."""
        state_container: AppContainer = request.app.state.container
        return _progress_payload(state_container.summary_service.get_overall())

    return app


def _entry_payload(entry: JournalEntry) -> dict[str, object]:
    return {
        "notes": entry.notes,
        "photos": list(entry.photos),
        "healthData": health_data_to_payload(entry.health_data),
        "timestamp": entry.saved_at.isoformat() if entry.saved_at else None,
    }


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    return {
        "age": profile.age,
        "birthDate": profile.birth_date.isoformat() if profile.birth_date else None,
        "sex": profile.sex,
        "heightFeet": profile.height_feet,
        "heightInches": profile.height_inches,
        "weight": profile.weight,
        "activityLevel": profile.activity_level,
        "bmr": int(round_half_up(profile.bmr)),
        "tdee": int(round_half_up(profile.tdee)),
        "calorieTarget": int(round_half_up(profile.calorie_target)),
        "updatedAt": profile.updated_at.isoformat(),
    }


def _summary_payload(summary: PeriodSummary) -> dict[str, object]:
    return {
        "avgCaloriesConsumed": summary.avg_calories_consumed,
        "avgCaloriesBurned": summary.avg_calories_burned,
        "totalExerciseMinutes": summary.total_exercise_minutes,
        "avgFastingHours": summary.avg_fasting_hours,
        "weightChange": summary.weight_change,
        "currentWeight": summary.current_weight,
        "daysTracked": summary.days_tracked,
        "calorieTarget": summary.calorie_target,
        "totalDeficit": summary.total_deficit,
        "avgDailyDeficit": summary.avg_daily_deficit,
        "totalNetDeficit": summary.total_net_deficit,
        "avgDailyNetDeficit": summary.avg_daily_net_deficit,
    }


def _progress_payload(
    progress: OverallProgress | InsufficientProgress,
) -> dict[str, object]:
    if isinstance(progress, InsufficientProgress):
        return {"message": progress.message, "entries": progress.entries}
    return {
        "startWeight": progress.start_weight,
        "currentWeight": progress.current_weight,
        "totalChange": progress.total_change,
        "startDate": progress.start_date.isoformat(),
        "currentDate": progress.current_date.isoformat(),
        "daysBetween": progress.days_between,
        "totalWeighIns": progress.total_weigh_ins,
    }
