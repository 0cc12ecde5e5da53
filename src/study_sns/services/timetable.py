"""Timetable helpers: day tokens, HH:MM times and recognised class slots."""

from __future__ import annotations

import re
from typing import Any

from study_sns.models.schedule import DAYS_OF_WEEK

PERIOD_COUNT = 12
PERIOD_SPACING_MINUTES = 60
PERIOD_LENGTH_MINUTES = 50

TIME_RE = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")
_EXTRACTED_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def validate_day(day: str) -> str:
    """Return ``day`` if it is a known weekday token, else raise ValueError."""
    if day not in DAYS_OF_WEEK:
        raise ValueError(f"day_of_week must be one of {', '.join(DAYS_OF_WEEK)}")
    return day


def is_valid_time(value: str) -> bool:
    return bool(TIME_RE.match(value))


def normalize_time(value: str) -> str:
    """Validate a time string and return it zero-padded as HH:MM.

    Seconds, when present, are dropped.
    """
    value = value.strip()
    if not is_valid_time(value):
        raise ValueError("Time must be in HH:MM format")
    hours, minutes = value.split(":")[:2]
    return f"{int(hours):02d}:{minutes}"


def day_index(day: str) -> int:
    """Sort key placing Monday first."""
    try:
        return DAYS_OF_WEEK.index(day)
    except ValueError:
        return len(DAYS_OF_WEEK)


def _format_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def period_times(first_period_start: str) -> list[tuple[str, str]]:
    """Start/end pairs for each period when the first one starts at ``first_period_start``."""
    hours, minutes = normalize_time(first_period_start).split(":")
    base = int(hours) * 60 + int(minutes)
    periods = []
    for i in range(PERIOD_COUNT):
        start = base + i * PERIOD_SPACING_MINUTES
        periods.append((_format_minutes(start), _format_minutes(start + PERIOD_LENGTH_MINUTES)))
    return periods


def period_table(first_period_start: str) -> str:
    """Render the period grid as prompt lines, one period per line."""
    return "\n".join(
        f"* Period {i}: {start}-{end}"
        for i, (start, end) in enumerate(period_times(first_period_start), start=1)
    )


def _clean_str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_extracted(items: Any) -> list[dict[str, Any]]:
    """Keep complete, well-formed class slots from a model reply and normalise them.

    An item survives only if title, day and both times are present, the day is a
    known token and both times are ``H:MM`` or ``HH:MM``.
    """
    if not isinstance(items, list):
        return []

    kept: list[dict[str, Any]] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        title = _clean_str(item.get("title"))
        day = _clean_str(item.get("day_of_week"))
        start = _clean_str(item.get("start_time"))
        end = _clean_str(item.get("end_time"))
        if not (title and day and start and end):
            continue
        if day not in DAYS_OF_WEEK:
            continue
        if not (_EXTRACTED_TIME_RE.match(start) and _EXTRACTED_TIME_RE.match(end)):
            continue

        confidence = item.get("confidence")
        kept.append(
            {
                "title": title,
                "day_of_week": day,
                "start_time": normalize_time(start),
                "end_time": normalize_time(end),
                "location": _clean_str(item.get("location")) or None,
                "confidence": float(confidence) if isinstance(confidence, (int, float)) else 1.0,
            }
        )
    return kept
