"""Supabase repository for journal entries."""

import json
from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from health_journal.domain.journal import (
    JournalEntry,
    health_data_from_payload,
    health_data_to_payload,
)
from health_journal.services.journal import JournalRepository

_COLUMNS = "date, notes, photos, health_data, timestamp"


@dataclass
class SupabaseJournalRepository(JournalRepository):
    """Supabase implementation for date-keyed journal entries."""

    client: Client
    table_name: str = "entries"

    def get_entry(self, day: date) -> JournalEntry | None:
        """Return the entry stored for a date."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_entries(self, start: date, end: date) -> list[JournalEntry]:
        """Return entries between two dates inclusive, oldest first."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_all_entries(self) -> list[JournalEntry]:
        """Return every entry, oldest first."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def save_entry(self, entry: JournalEntry) -> None:
        """Insert or replace the row for the entry's date."""
        self.client.table(self.table_name).upsert(
            {
                "date": entry.day.isoformat(),
                "notes": entry.notes,
                "photos": list(entry.photos),
                "health_data": health_data_to_payload(entry.health_data),
                "timestamp": entry.saved_at.isoformat() if entry.saved_at else None,
            },
            on_conflict="date",
        ).execute()

    def delete_entry(self, day: date) -> None:
        """Delete the row for a date."""
        self.client.table(self.table_name).delete().eq(
            "date", day.isoformat()
        ).execute()


def _parse_row(row: dict[str, object]) -> JournalEntry:
    saved_at_raw = row.get("timestamp")
    saved_at = (
        datetime.fromisoformat(saved_at_raw)
        if isinstance(saved_at_raw, str) and saved_at_raw
        else None
    )
    return JournalEntry(
        day=date.fromisoformat(str(row["date"])),
        notes=str(row.get("notes") or ""),
        photos=_parse_photos(_decode_json(row.get("photos"))),
        health_data=health_data_from_payload(_decode_json(row.get("health_data"))),
        saved_at=saved_at,
    )


def _parse_photos(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(photo) for photo in value if photo]


def _decode_json(value: object) -> object:
    # Rows migrated from SQLite store JSON columns as text.
    if isinstance(value, str):
        return json.loads(value) if value else None
    return value
