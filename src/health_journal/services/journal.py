"""Journal entry service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol

from health_journal.domain.journal import JournalEntry
from health_journal.services.extraction import parse_journal
from health_journal.services.fasting import resolve_fasting

logger = logging.getLogger(__name__)


class JournalRepository(Protocol):
    """Persistence interface for date-keyed journal entries."""

    def get_entry(self, day: date) -> JournalEntry | None:
        """Return the entry stored for a date."""

    def list_entries(self, start: date, end: date) -> list[JournalEntry]:
        """Return entries in an inclusive date range, oldest first."""

    def list_all_entries(self) -> list[JournalEntry]:
        """Return every entry, oldest first."""

    def save_entry(self, entry: JournalEntry) -> None:
        """Insert or wholly replace the entry for its date."""

    def delete_entry(self, day: date) -> None:
        """Delete the entry for a date if present."""


@dataclass
class JournalService:
    """Service that derives health data and persists journal entries."""

    repository: JournalRepository

    def get_entry(self, day: date) -> JournalEntry | None:
        """Return the entry for a date."""
        return self.repository.get_entry(day)

    def list_entries(self) -> list[JournalEntry]:
        """Return every entry, newest first."""
        return sorted(
            self.repository.list_all_entries(),
            key=lambda entry: entry.day,
            reverse=True,
        )

    def save_entry(
        self, day: date, notes: str | None, photos: list[str] | None = None
    ) -> JournalEntry | None:
        """Save a day's notes and photos, or delete the entry when both are empty.

        Fasting is bridged from the stored entry of the previous calendar day.
        """
        if not notes and not photos:
            self.repository.delete_entry(day)
            logger.info("Deleted journal entry for %s", day)
            return None

        health_data = parse_journal(notes or "")
        fasting_hours = resolve_fasting(day, health_data, self.repository.get_entry)
        if fasting_hours > 0:
            health_data = replace(health_data, fasting_hours=fasting_hours)

        entry = JournalEntry(
            day=day,
            notes=notes or "",
            photos=list(photos or []),
            health_data=health_data,
            saved_at=datetime.now(tz=UTC),
        )
        self.repository.save_entry(entry)
        logger.info("Saved journal entry for %s", day)
        return entry
