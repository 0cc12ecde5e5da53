"""Elapsed-time arithmetic for study sessions.

Every function takes the current instant explicitly so the state machine can
be exercised without a clock or a database.
"""

from __future__ import annotations

import calendar
import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from study_sns.db.time import as_utc
from study_sns.models.study import (
    SESSION_ENDED,
    SESSION_PAUSED,
    SESSION_STUDYING,
    StudySession,
)


class StudySessionError(Exception):
    """Raised when a transition is not allowed from the session's current state."""


def segment_seconds(session: StudySession, now: datetime) -> int:
    """Whole seconds since the current studying segment began.

    A segment begins at the last resume (stored in ``paused_at``) or at start.
    """
    anchor = as_utc(session.paused_at or session.started_at)
    delta = (as_utc(now) - anchor).total_seconds()
    return max(0, math.floor(delta))


def elapsed_seconds(session: StudySession, now: datetime) -> int:
    """Total studied seconds so far, including a running segment."""
    total = session.accumulated_seconds or 0
    if session.status == SESSION_STUDYING:
        total += segment_seconds(session, now)
    return total


def apply_pause(session: StudySession, now: datetime) -> None:
    if session.status != SESSION_STUDYING:
        raise StudySessionError("Only a studying session can be paused")
    session.accumulated_seconds = (session.accumulated_seconds or 0) + segment_seconds(session, now)
    session.status = SESSION_PAUSED
    session.paused_at = now


def apply_resume(session: StudySession, now: datetime) -> None:
    if session.status != SESSION_PAUSED:
        raise StudySessionError("Only a paused session can be resumed")
    session.status = SESSION_STUDYING
    session.paused_at = now


def apply_end(session: StudySession, now: datetime) -> int:
    """Close the session and return its final duration in seconds."""
    if session.status == SESSION_ENDED:
        raise StudySessionError("Session has already ended")
    if session.status == SESSION_STUDYING:
        session.accumulated_seconds = (session.accumulated_seconds or 0) + segment_seconds(
            session, now
        )
    session.status = SESSION_ENDED
    session.ended_at = now
    session.active_guard = None
    return session.accumulated_seconds


def longest_streak(days: Iterable[date]) -> int:
    """Length of the longest run of consecutive calendar dates."""
    ordered = sorted(set(days))
    best = run = 0
    previous: date | None = None
    for day in ordered:
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month.

    Raises:
        ValueError: For a month outside 1..12
    """
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)
