"""Classification of timestamped note lines into fast-breaking meals."""

import re

from health_journal.domain.journal import TimedMealObservation

MINUTES_PER_DAY = 24 * 60
NOON = 12
FAST_BREAKING_CALORIES = 20
FASTING_SAFE_ITEMS: tuple[str, ...] = (
    "black coffee",
    "coffee",
    "water",
    "tea",
    "sparkling water",
    "electrolytes",
)
FASTING_SAFE_MARKERS: tuple[str, ...] = ("~5 cal", "0 cal")

_CLOCK = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AP]M)\s*$", re.IGNORECASE)
_TIMED_LINE = re.compile(
    # Bold markers count anywhere on a line, plain markers only at its start.
    r"(?:\*\*(?P<bold>\d{1,2}:\d{2}[ \t]*[AP]M)\*\*"
    r"|^[ \t]*(?:[-*][ \t]+)?(?P<plain>\d{1,2}:\d{2}[ \t]*[AP]M))"
    r"[ \t]*[-\u2013\u2014:][ \t]*(?P<content>[^\n]+)$",
    re.IGNORECASE | re.MULTILINE,
)
_INLINE_CALORIES = re.compile(r"~?(\d+)\s*cal")


def parse_clock(value: str) -> int:
    """Convert a 12-hour clock string such as ``9:30 PM`` to minutes."""
    match = _CLOCK.match(value)
    if match is None:
        raise ValueError(f"Invalid clock time: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not 1 <= hours <= NOON or minutes > 59:
        raise ValueError(f"Invalid clock time: {value!r}")
    period = match.group(3).upper()
    if period == "AM" and hours == NOON:
        hours = 0
    elif period == "PM" and hours != NOON:
        hours += 12
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    """Format minutes since midnight as a canonical 12-hour clock string."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minutes out of range: {minutes}")
    hours, remainder = divmod(minutes, 60)
    period = "AM" if hours < NOON else "PM"
    display_hour = hours % NOON or NOON
    return f"{display_hour}:{remainder:02d} {period}"


def breaks_fast(content: str) -> bool:
    """Return True when a lowercased note line ends a fast."""
    calories = _INLINE_CALORIES.search(content)
    calorie_count = int(calories.group(1)) if calories else 0
    if calorie_count > FAST_BREAKING_CALORIES:
        return True
    if any(item in content for item in FASTING_SAFE_ITEMS):
        return False
    return not any(marker in content for marker in FASTING_SAFE_MARKERS)


def timed_observations(text: str) -> list[TimedMealObservation]:
    """Return every valid timestamped line in note order."""
    observations = []
    for match in _TIMED_LINE.finditer(text or ""):
        marker = match.group("bold") or match.group("plain")
        try:
            time = format_clock(parse_clock(marker))
        except ValueError:
            continue
        content = match.group("content").strip().lower()
        observations.append(
            TimedMealObservation(
                time=time, content=content, breaks_fast=breaks_fast(content)
            )
        )
    return observations


def classify_meals(text: str) -> tuple[str | None, str | None]:
    """Return the first and last fast-breaking meal times of the day."""
    meal_minutes = sorted(
        parse_clock(observation.time)
        for observation in timed_observations(text)
        if observation.breaks_fast
    )
    if not meal_minutes:
        return None, None
    return format_clock(meal_minutes[0]), format_clock(meal_minutes[-1])
