"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from health_journal.adapters.supabase_journal_repository import (
    SupabaseJournalRepository,
)
from health_journal.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from health_journal.domain.journal import HealthData, JournalEntry
from health_journal.domain.profile import UserProfile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": [], "delete": []}
    )
    last_payload: object | None = None
    last_on_conflict: str | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_journal_repository_get_entry_parses_row() -> None:
    client = FakeSupabaseClient()
    client.table("entries").queue(
        "select",
        [
            {
                "date": "2024-06-10",
                "notes": "Weighed 180",
                "photos": ["/uploads/a.jpg"],
                "health_data": {"caloriesConsumed": 1500, "weight": 180},
                "timestamp": "2024-06-10T20:00:00+00:00",
            }
        ],
    )

    entry = SupabaseJournalRepository(client).get_entry(date(2024, 6, 10))

    assert entry is not None
    assert entry.day == date(2024, 6, 10)
    assert entry.photos == ["/uploads/a.jpg"]
    assert entry.health_data == HealthData(calories_consumed=1500, weight=180.0)
    assert entry.saved_at == datetime(2024, 6, 10, 20, tzinfo=UTC)
    assert ("eq", "date", "2024-06-10") in client.table("entries").last_filters


def test_journal_repository_reads_legacy_text_columns() -> None:
    client = FakeSupabaseClient()
    client.table("entries").queue(
        "select",
        [
            {
                "date": "2024-06-09",
                "notes": None,
                "photos": "[]",
                "health_data": '{"calories": 1700, "exercise": 40, "weight": null}',
                "timestamp": None,
            }
        ],
    )

    entries = SupabaseJournalRepository(client).list_all_entries()

    assert entries[0].notes == ""
    assert entries[0].photos == []
    assert entries[0].health_data == HealthData(
        calories_consumed=1700, exercise_minutes=40
    )
    assert entries[0].saved_at is None


def test_journal_repository_lists_range() -> None:
    client = FakeSupabaseClient()
    client.table("entries").queue(
        "select",
        [
            {"date": "2024-06-10", "notes": "a"},
            {"date": "2024-06-11", "notes": "b"},
        ],
    )

    entries = SupabaseJournalRepository(client).list_entries(
        date(2024, 6, 10), date(2024, 6, 16)
    )

    assert [entry.notes for entry in entries] == ["a", "b"]
    filters = client.table("entries").last_filters
    assert ("gte", "date", "2024-06-10") in filters
    assert ("lte", "date", "2024-06-16") in filters


def test_journal_repository_upserts_by_date() -> None:
    client = FakeSupabaseClient()
    entry = JournalEntry(
        day=date(2024, 6, 10),
        notes="Weighed 180",
        photos=["/uploads/a.jpg"],
        health_data=HealthData(weight=180.0),
        saved_at=datetime(2024, 6, 10, 20, tzinfo=UTC),
    )

    SupabaseJournalRepository(client).save_entry(entry)

    table = client.table("entries")
    assert table.last_on_conflict == "date"
    assert table.last_payload["date"] == "2024-06-10"
    assert table.last_payload["health_data"]["weight"] == 180.0
    assert table.last_payload["timestamp"] == "2024-06-10T20:00:00+00:00"


def test_journal_repository_delete_entry() -> None:
    client = FakeSupabaseClient()

    SupabaseJournalRepository(client, table_name="journal").delete_entry(
        date(2024, 6, 10)
    )

    assert client.table("journal").last_filters == [("eq", "date", "2024-06-10")]


def test_profile_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseProfileRepository(client)
    profile = UserProfile(
        age=30,
        sex="male",
        height_feet=5,
        height_inches=10,
        weight=180.0,
        activity_level="sedentary",
        bmr=1782.7,
        tdee=2139.3,
        calorie_target=1639.3,
        updated_at=datetime(2024, 6, 15, tzinfo=UTC),
        birth_date=date(1994, 1, 2),
    )

    repository.save_profile(profile)
    table = client.table("user_profile")
    assert table.last_on_conflict == "id"
    assert table.last_payload["id"] == 1

    table.queue("select", [dict(table.last_payload)])
    assert repository.get_profile() == profile


def test_profile_repository_missing_profile() -> None:
    assert SupabaseProfileRepository(FakeSupabaseClient()).get_profile() is None
