"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from health_journal.config import Settings
from health_journal.containers import AppContainer
from health_journal.domain.journal import HealthData, JournalEntry
from health_journal.domain.profile import UserProfile
from health_journal.services.journal import JournalRepository, JournalService
from health_journal.services.profile import ProfileRepository, ProfileService
from health_journal.services.summary import SummaryService


@dataclass
class InMemoryJournalRepository(JournalRepository):
    """In-memory journal repository for tests."""

    entries: dict[date, JournalEntry] = field(default_factory=dict)
    lookups: list[date] = field(default_factory=list)

    def get_entry(self, day: date) -> JournalEntry | None:
        self.lookups.append(day)
        return self.entries.get(day)

    def list_entries(self, start: date, end: date) -> list[JournalEntry]:
        return [
            self.entries[day] for day in sorted(self.entries) if start <= day <= end
        ]

    def list_all_entries(self) -> list[JournalEntry]:
        return [self.entries[day] for day in sorted(self.entries)]

    def save_entry(self, entry: JournalEntry) -> None:
        self.entries[entry.day] = entry

    def delete_entry(self, day: date) -> None:
        self.entries.pop(day, None)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """Single-slot profile repository for tests."""

    profile: UserProfile | None = None
    saves: int = 0

    def get_profile(self) -> UserProfile | None:
        return self.profile

    def save_profile(self, profile: UserProfile) -> None:
        self.profile = profile
        self.saves += 1


def make_entry(
    day: date, notes: str = "", health_data: HealthData | None = None
) -> JournalEntry:
    """Build a stored entry with an optional persisted snapshot."""
    return JournalEntry(day=day, notes=notes, health_data=health_data or HealthData())


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def journal_repository() -> InMemoryJournalRepository:
    return InMemoryJournalRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    journal_repository: InMemoryJournalRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    journal_service = JournalService(journal_repository)
    profile_service = ProfileService(
        profile_repository,
        default_calorie_target=settings.default_calorie_target,
        today=lambda: date(2024, 6, 15),
    )
    summary_service = SummaryService(
        repository=journal_repository,
        profile_service=profile_service,
    )

    return AppContainer(
        settings=settings,
        journal_service=journal_service,
        profile_service=profile_service,
        summary_service=summary_service,
    )
