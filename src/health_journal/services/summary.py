"""Aggregation of journal entries into period summaries."""

import calendar
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, timedelta

from health_journal.domain.journal import HealthData, JournalEntry
from health_journal.domain.summary import (
    InsufficientProgress,
    OverallProgress,
    PeriodSummary,
)
from health_journal.services.extraction import parse_journal
from health_journal.services.fasting import resolve_fasting
from health_journal.services.journal import JournalRepository
from health_journal.services.profile import ProfileService

DECEMBER = 12
MIN_WEIGH_INS = 2
INSUFFICIENT_WEIGH_INS_MESSAGE = "Need at least 2 weight entries to show progress"


def merge_health_data(
    persisted: HealthData, fresh: HealthData, smart_fasting: float
) -> HealthData:
    """Merge a stored snapshot with a fresh re-extraction.

    Fresh values win unless they are empty. Fasting prefers the bridged value,
    then the freshly extracted one, then the stored one.
    """
    return HealthData(
        calories_consumed=fresh.calories_consumed or persisted.calories_consumed,
        calories_burned=fresh.calories_burned or persisted.calories_burned,
        exercise_minutes=fresh.exercise_minutes or persisted.exercise_minutes,
        weight=fresh.weight or persisted.weight,
        fasting_hours=(
            smart_fasting or fresh.fasting_hours or persisted.fasting_hours or 0.0
        ),
        first_meal_time=fresh.first_meal_time or persisted.first_meal_time,
        last_meal_time=fresh.last_meal_time or persisted.last_meal_time,
    )


def rederive_entries(entries: Sequence[JournalEntry]) -> list[HealthData]:
    """Re-extract every entry and merge it with its stored snapshot.

    Fasting is bridged from whichever entry precedes it in ``entries``.
    """
    merged = []
    for index, entry in enumerate(entries):
        fresh = parse_journal(entry.notes)
        previous = entries[index - 1] if index > 0 else None
        smart_fasting = resolve_fasting(
            entry.day, fresh, lambda _day, previous=previous: previous
        )
        merged.append(merge_health_data(entry.health_data, fresh, smart_fasting))
    return merged


def empty_summary(calorie_target: float | None = None) -> PeriodSummary:
    """Return the summary for a range without entries."""
    return PeriodSummary(
        avg_calories_consumed=0,
        avg_calories_burned=0,
        total_exercise_minutes=0,
        avg_fasting_hours=0.0,
        weight_change=None,
        current_weight=None,
        days_tracked=0,
        calorie_target=_round_target(calorie_target),
        total_deficit=0,
        avg_daily_deficit=0,
        total_net_deficit=0,
        avg_daily_net_deficit=0,
    )


def summarize(
    entries: Sequence[JournalEntry], calorie_target: float | None
) -> PeriodSummary:
    """Summarize date-ordered entries against an optional calorie target."""
    if not entries:
        return empty_summary(calorie_target)

    days = rederive_entries(entries)
    day_count = len(days)
    total_consumed = sum(day.calories_consumed for day in days)
    total_burned = sum(day.calories_burned for day in days)

    fasting_days = [day.fasting_hours for day in days if day.fasting_hours > 0]
    avg_fasting = sum(fasting_days) / len(fasting_days) if fasting_days else 0.0

    weights = [day.weight for day in days if day.weight]
    weight_change = (
        round_half_up(weights[-1] - weights[0], 1)
        if len(weights) >= MIN_WEIGH_INS
        else None
    )

    total_deficit = 0.0
    total_net_deficit = 0.0
    if calorie_target:
        target_total = calorie_target * day_count
        total_deficit = target_total - total_consumed
        total_net_deficit = target_total - (total_consumed - total_burned)

    return PeriodSummary(
        avg_calories_consumed=int(round_half_up(total_consumed / day_count)),
        avg_calories_burned=int(round_half_up(total_burned / day_count)),
        total_exercise_minutes=sum(day.exercise_minutes for day in days),
        avg_fasting_hours=round_half_up(avg_fasting, 1),
        weight_change=weight_change,
        current_weight=weights[-1] if weights else None,
        days_tracked=day_count,
        calorie_target=_round_target(calorie_target),
        total_deficit=int(round_half_up(total_deficit)),
        avg_daily_deficit=int(round_half_up(total_deficit / day_count)),
        total_net_deficit=int(round_half_up(total_net_deficit)),
        avg_daily_net_deficit=int(round_half_up(total_net_deficit / day_count)),
    )


def overall_progress(
    entries: Sequence[JournalEntry],
) -> OverallProgress | InsufficientProgress:
    """Report weight progress across every entry that carries a weight."""
    weigh_ins: list[tuple[date, float]] = []
    for entry in entries:
        weight = parse_journal(entry.notes).weight or entry.health_data.weight
        if weight:
            weigh_ins.append((entry.day, weight))

    if len(weigh_ins) < MIN_WEIGH_INS:
        return InsufficientProgress(
            message=INSUFFICIENT_WEIGH_INS_MESSAGE, entries=len(weigh_ins)
        )

    start_date, start_weight = weigh_ins[0]
    current_date, current_weight = weigh_ins[-1]
    return OverallProgress(
        start_weight=start_weight,
        current_weight=current_weight,
        total_change=round_half_up(current_weight - start_weight, 1),
        start_date=start_date,
        current_date=current_date,
        days_between=(current_date - start_date).days,
        total_weigh_ins=len(weigh_ins),
    )


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` places with halves going up."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _round_target(calorie_target: float | None) -> int | None:
    if not calorie_target:
        return None
    return int(round_half_up(calorie_target))


def week_bounds(day: date) -> tuple[date, date]:
    """Return the Monday and Sunday of the week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(year: int, month: int) -> tuple[date, date] | None:
    """Return the first and last day of a month, or None when invalid."""
    if not 1 <= month <= DECEMBER or not MINYEAR <= year <= MAXYEAR:
        return None
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


@dataclass
class SummaryService:
    """Service for weekly, monthly and overall journal summaries."""

    repository: JournalRepository
    profile_service: ProfileService

    def get_range(self, start: date, end: date) -> PeriodSummary:
        """Return the summary for an inclusive date range."""
        calorie_target = self.profile_service.calorie_target()
        if end < start:
            return empty_summary(calorie_target)
        entries = self.repository.list_entries(start, end)
        return summarize(entries, calorie_target)

    def get_week(self, day: date) -> PeriodSummary:
        """Return the Monday-to-Sunday summary for the week containing a date."""
        start, end = week_bounds(day)
        return self.get_range(start, end)

    def get_month(self, year: int, month: int) -> PeriodSummary:
        """Return the summary for a calendar month."""
        bounds = month_bounds(year, month)
        if bounds is None:
            return empty_summary(self.profile_service.calorie_target())
        return self.get_range(*bounds)

    def get_overall(self) -> OverallProgress | InsufficientProgress:
        """Return weight progress across all entries."""
        return overall_progress(self.repository.list_all_entries())
