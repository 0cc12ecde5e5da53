"""Tests for the study session state machine and record helpers."""

from datetime import UTC, date, datetime, timedelta

import pytest

from study_sns.models.study import SESSION_ENDED, SESSION_PAUSED, SESSION_STUDYING, StudySession
from study_sns.services.study_timer import (
    StudySessionError,
    apply_end,
    apply_pause,
    apply_resume,
    elapsed_seconds,
    longest_streak,
    month_bounds,
)

T0 = datetime(2026, 3, 2, 9, 0, 0, tzinfo=UTC)


def _session(**kwargs) -> StudySession:
    fields = {
        "user_id": "u1",
        "status": SESSION_STUDYING,
        "started_at": T0,
        "paused_at": None,
        "accumulated_seconds": 0,
        "active_guard": "u1",
    }
    fields.update(kwargs)
    return StudySession(**fields)


def test_pause_banks_segment_since_start():
    session = _session()
    apply_pause(session, T0 + timedelta(seconds=90.9))
    assert session.status == SESSION_PAUSED
    assert session.accumulated_seconds == 90
    assert session.paused_at == T0 + timedelta(seconds=90.9)


def test_pause_after_resume_counts_from_resume_instant():
    session = _session()
    apply_pause(session, T0 + timedelta(minutes=10))
    apply_resume(session, T0 + timedelta(minutes=15))
    assert session.status == SESSION_STUDYING
    apply_pause(session, T0 + timedelta(minutes=20))
    assert session.accumulated_seconds == 20 * 60 - 5 * 60


def test_pause_requires_studying():
    session = _session(status=SESSION_PAUSED, paused_at=T0)
    with pytest.raises(StudySessionError):
        apply_pause(session, T0 + timedelta(seconds=5))


def test_resume_requires_paused():
    with pytest.raises(StudySessionError):
        apply_resume(_session(), T0)


def test_end_while_paused_keeps_accumulated():
    session = _session(status=SESSION_PAUSED, paused_at=T0, accumulated_seconds=300)
    duration = apply_end(session, T0 + timedelta(hours=1))
    assert duration == 300
    assert session.status == SESSION_ENDED
    assert session.active_guard is None


def test_end_while_studying_adds_last_segment():
    session = _session(accumulated_seconds=100, paused_at=T0)
    assert apply_end(session, T0 + timedelta(seconds=50)) == 150
    assert session.ended_at == T0 + timedelta(seconds=50)


def test_end_twice_is_rejected():
    session = _session()
    apply_end(session, T0)
    with pytest.raises(StudySessionError):
        apply_end(session, T0)


def test_naive_timestamps_are_treated_as_utc():
    session = _session(started_at=T0.replace(tzinfo=None))
    assert elapsed_seconds(session, T0 + timedelta(seconds=42)) == 42


def test_clock_skew_never_goes_negative():
    session = _session()
    assert elapsed_seconds(session, T0 - timedelta(seconds=10)) == 0


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        ([], 0),
        ([date(2026, 1, 1)], 1),
        ([date(2026, 1, 1), date(2026, 1, 2), date(2026, 1, 4)], 2),
        ([date(2026, 1, 3), date(2026, 1, 1), date(2026, 1, 2), date(2026, 1, 2)], 3),
        ([date(2025, 12, 31), date(2026, 1, 1)], 2),
    ],
)
def test_longest_streak(days, expected):
    assert longest_streak(days) == expected


def test_month_bounds_handles_leap_february():
    assert month_bounds(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))


def test_month_bounds_rejects_bad_month():
    with pytest.raises(ValueError):
        month_bounds(2026, 13)
