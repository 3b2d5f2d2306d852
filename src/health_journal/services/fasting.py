"""Fasting duration resolution across consecutive journal days."""

import logging
import math
from collections.abc import Callable
from datetime import date, timedelta

from health_journal.domain.journal import HealthData, JournalEntry
from health_journal.services.meal_timeline import (
    MINUTES_PER_DAY,
    classify_meals,
    parse_clock,
)

logger = logging.getLogger(__name__)

PreviousEntryLookup = Callable[[date], JournalEntry | None]


def fasting_hours_between(last_meal_time: str, first_meal_time: str) -> float:
    """Return hours from a last meal to the next first meal, wrapping midnight.

    The result is rounded half-up to one decimal place.
    """
    last_minutes = parse_clock(last_meal_time)
    first_minutes = parse_clock(first_meal_time)
    if first_minutes >= last_minutes:
        elapsed = first_minutes - last_minutes
    else:
        elapsed = (MINUTES_PER_DAY - last_minutes) + first_minutes
    return math.floor(elapsed / 6 + 0.5) / 10


def last_meal_of(entry: JournalEntry) -> str | None:
    """Return an entry's last fast-breaking meal, re-deriving it from notes."""
    _, last_meal = classify_meals(entry.notes)
    # Entries saved before meal lines were recognised keep only the stored time.
    return last_meal or entry.health_data.last_meal_time


def resolve_fasting(
    day: date, today: HealthData, previous_entry: PreviousEntryLookup
) -> float:
    """Return the fasting hours that ended on ``day``.

    An explicit duration from the notes wins. Otherwise today's first meal is
    bridged back to the last meal of the entry returned for ``day - 1``.
    Missing data of any kind resolves to zero.
    """
    if today.fasting_hours > 0:
        return today.fasting_hours
    if not today.first_meal_time:
        return 0.0
    try:
        previous = previous_entry(day - timedelta(days=1))
    except Exception:
        logger.warning("Previous entry lookup failed for %s", day, exc_info=True)
        return 0.0
    if previous is None:
        return 0.0
    last_meal = last_meal_of(previous)
    if not last_meal:
        return 0.0
    try:
        return fasting_hours_between(last_meal, today.first_meal_time)
    except ValueError:
        logger.warning("Unreadable meal times for %s", day)
        return 0.0
