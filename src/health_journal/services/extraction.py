"""Extraction of scalar health facts from free-text journal notes.

Every field owns an ordered list of patterns. The first pattern that matches
wins, so specific phrasings sit ahead of the generic fallbacks.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from health_journal.domain.journal import HealthData
from health_journal.services.meal_timeline import classify_meals

logger = logging.getLogger(__name__)

_INT = r"~?(\d[\d,]*)\+?"
_DECIMAL = r"~?(\d[\d,]*(?:\.\d+)?)\+?"


@dataclass(frozen=True)
class FieldPattern:
    """A single phrase pattern paired with a converter for its capture."""

    regex: re.Pattern[str]
    convert: Callable[[str], float]

    def extract(self, text: str) -> float | None:
        """Return the converted value if the pattern matches, else None."""
        match = self.regex.search(text)
        if match is None:
            return None
        try:
            return self.convert(match.group(1))
        except ValueError:
            return None


def parse_number(raw: str) -> float:
    """Parse a number, ignoring thousands separators and approx markers."""
    cleaned = raw.replace(",", "").strip().lstrip("~").rstrip("+")
    return float(cleaned)


def parse_whole_number(raw: str) -> float:
    """Parse a number and truncate it to a whole value."""
    return float(int(parse_number(raw)))


def _pattern(expression: str, convert: Callable[[str], float]) -> FieldPattern:
    return FieldPattern(re.compile(expression, re.IGNORECASE), convert)


CALORIES_CONSUMED_PATTERNS: tuple[FieldPattern, ...] = (
    _pattern(rf"total\s+calories:[^\d\n]*?{_INT}", parse_whole_number),
    _pattern(rf"total\s+calories\s+consumed:[^\d\n]*?{_INT}", parse_whole_number),
    _pattern(rf"net\s+calories:[^\d\n]*?{_INT}", parse_whole_number),
    _pattern(rf"(?<!exercise\s)\bcalories:[^\d\n]*?{_INT}", parse_whole_number),
)

CALORIES_BURNED_PATTERNS: tuple[FieldPattern, ...] = (
    _pattern(rf"calories\s+burned:[^\d\n]*?{_INT}", parse_whole_number),
    _pattern(rf"\bburned:\s*{_INT}\s*cal", parse_whole_number),
    _pattern(rf"exercise\s+calories:[^\d\n]*?{_INT}", parse_whole_number),
    _pattern(rf"workout[^\n]*?burned[^\d\n]*?{_INT}", parse_whole_number),
    _pattern(rf"{_INT}\s*cal(?:ories)?\s+burned", parse_whole_number),
)

EXERCISE_MINUTES_PATTERNS: tuple[FieldPattern, ...] = (
    _pattern(r"exercise:[^\n]*?(\d+)\+?\s*min", parse_whole_number),
    _pattern(r"total[^\n]*?exercise[^\n]*?(\d+)\+?\s*min", parse_whole_number),
    _pattern(r"(\d+)\+\s*min(?:utes)?\s+total", parse_whole_number),
    _pattern(r"exercise[^\n]*?(\d+)\+?\s*minutes\s+total", parse_whole_number),
)

# The bare unit pattern goes last so unrelated numbers rarely win.
WEIGHT_PATTERNS: tuple[FieldPattern, ...] = (
    _pattern(rf"weigh(?:ed)?\s+in\s+at\s+{_DECIMAL}", parse_number),
    _pattern(rf"weigh(?:ed)?\s+{_DECIMAL}", parse_number),
    _pattern(rf"weight:?\s*{_DECIMAL}", parse_number),
    _pattern(rf"(?<![\d.]){_DECIMAL}\s*lbs?\b", parse_number),
)

FASTING_HOURS_PATTERNS: tuple[FieldPattern, ...] = (
    _pattern(r"fasting\s+window:[^\n]*?(\d+(?:\.\d+)?)\s*hours?", parse_number),
)


def first_match(patterns: Sequence[FieldPattern], text: str) -> float | None:
    """Return the value of the first pattern in priority order that matches."""
    for pattern in patterns:
        value = pattern.extract(text)
        if value is not None:
            return value
    return None


def extract_fields(text: str) -> HealthData:
    """Extract calories, exercise, weight and explicit fasting from notes."""
    if not text:
        return HealthData()
    consumed = first_match(CALORIES_CONSUMED_PATTERNS, text)
    burned = first_match(CALORIES_BURNED_PATTERNS, text)
    exercise = first_match(EXERCISE_MINUTES_PATTERNS, text)
    weight = first_match(WEIGHT_PATTERNS, text)
    fasting = first_match(FASTING_HOURS_PATTERNS, text)
    return HealthData(
        calories_consumed=int(consumed or 0),
        calories_burned=int(burned or 0),
        exercise_minutes=int(exercise or 0),
        weight=weight or None,
        fasting_hours=fasting or 0.0,
    )


def parse_journal(text: str) -> HealthData:
    """Extract scalar facts and the fast-breaking meal window from notes."""
    data = extract_fields(text)
    first_meal, last_meal = classify_meals(text)
    data = replace(data, first_meal_time=first_meal, last_meal_time=last_meal)
    logger.debug("Parsed health data: %s", data)
    return data
