"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from health_journal.adapters.supabase_journal_repository import (
    SupabaseJournalRepository,
)
from health_journal.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from health_journal.config import Settings
from health_journal.services.journal import JournalService
from health_journal.services.profile import ProfileService
from health_journal.services.summary import SummaryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    journal_service: JournalService
    profile_service: ProfileService
    summary_service: SummaryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    journal_repository = SupabaseJournalRepository(
        supabase_client, table_name=resolved_settings.entries_table
    )
    profile_repository = SupabaseProfileRepository(
        supabase_client, table_name=resolved_settings.profile_table
    )
    journal_service = JournalService(journal_repository)
    profile_service = ProfileService(
        profile_repository,
        default_calorie_target=resolved_settings.default_calorie_target,
    )
    summary_service = SummaryService(
        repository=journal_repository,
        profile_service=profile_service,
    )

    return AppContainer(
        settings=resolved_settings,
        journal_service=journal_service,
        profile_service=profile_service,
        summary_service=summary_service,
    )
