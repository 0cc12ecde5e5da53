# src/study_sns/api/v1/endpoints/study.py
"""Study timer endpoints: sessions, the live board and daily records."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from study_sns.api.v1.dependencies import CurrentUserDep, SessionDep
from study_sns.db.time import utcnow
from study_sns.models import Profile, StudyRecord, StudySession
from study_sns.models.study import OPEN_SESSION_STATES, SESSION_STUDYING
from study_sns.schemas.study import (
    LiveSession,
    LiveStudyResponse,
    LiveStudyUser,
    StudyCurrentResponse,
    StudyEndResponse,
    StudyRecordResponse,
    StudyRecordsResponse,
    StudySessionAction,
    StudySessionEnvelope,
    StudySessionResponse,
    StudyStartRequest,
    StudySummary,
)
from study_sns.services.study_timer import (
    StudySessionError,
    apply_end,
    apply_pause,
    apply_resume,
    longest_streak,
    month_bounds,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/study", tags=["study"])

ANONYMOUS_NAME = "익명"


def _open_session(db: Session, user_id: str) -> StudySession | None:
    return (
        db.query(StudySession)
        .filter(
            StudySession.user_id == user_id,
            StudySession.status.in_(OPEN_SESSION_STATES),
        )
        .order_by(desc(StudySession.started_at))
        .first()
    )


def _owned_session(db: Session, session_id: int, user_id: str) -> StudySession:
    session = db.get(StudySession, session_id)
    if session is None or session.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Study session not found",
        )
    return session


def _conflict(existing: StudySession) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={
            "error": "A study session is already in progress",
            "existing_session": StudySessionResponse.model_validate(existing).model_dump(
                mode="json"
            ),
        },
    )


def _bad_state(exc: StudySessionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/start", response_model=StudySessionEnvelope, status_code=status.HTTP_201_CREATED)
async def start_session(
    payload: StudyStartRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StudySessionEnvelope:
    """Start a timer. Only one studying or paused session may exist per user.

    Raises:
        HTTPException: 409 with ``existing_session`` when one is already open
    """
    existing = _open_session(db, current_user.id)
    if existing is not None:
        raise _conflict(existing)

    subject = (payload.study_subject or "").strip() or None
    session = StudySession(
        user_id=current_user.id,
        status=SESSION_STUDYING,
        started_at=utcnow(),
        accumulated_seconds=0,
        study_subject=subject,
        active_guard=current_user.id,
    )
    db.add(session)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        existing = _open_session(db, current_user.id)
        if existing is None:
            raise
        raise _conflict(existing) from err
    db.refresh(session)
    logger.info("User %s started study session %s", current_user.id, session.id)
    return StudySessionEnvelope(session=StudySessionResponse.model_validate(session))


@router.post("/pause", response_model=StudySessionEnvelope)
async def pause_session(
    payload: StudySessionAction,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StudySessionEnvelope:
    """Pause a studying session and bank the running segment."""
    session = _owned_session(db, payload.session_id, current_user.id)
    try:
        apply_pause(session, utcnow())
    except StudySessionError as exc:
        raise _bad_state(exc) from exc
    db.commit()
    db.refresh(session)
    return StudySessionEnvelope(session=StudySessionResponse.model_validate(session))


@router.post("/resume", response_model=StudySessionEnvelope)
async def resume_session(
    payload: StudySessionAction,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StudySessionEnvelope:
    """Resume a paused session; a new segment starts now."""
    session = _owned_session(db, payload.session_id, current_user.id)
    try:
        apply_resume(session, utcnow())
    except StudySessionError as exc:
        raise _bad_state(exc) from exc
    db.commit()
    db.refresh(session)
    return StudySessionEnvelope(session=StudySessionResponse.model_validate(session))


@router.post("/end", response_model=StudyEndResponse)
async def end_session(
    payload: StudySessionAction,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StudyEndResponse:
    """Stop a session and add its duration to today's record.

    Args:
        payload: Session to end
        current_user: Authenticated owner
        db: Database session

    Returns:
        The ended session, its total duration and the updated daily record

    Raises:
        HTTPException: 400 if already ended, 404 if not the caller's session
    """
    session = _owned_session(db, payload.session_id, current_user.id)
    now = utcnow()
    try:
        duration = apply_end(session, now)
    except StudySessionError as exc:
        raise _bad_state(exc) from exc

    today = now.date()
    record = (
        db.query(StudyRecord)
        .filter(StudyRecord.user_id == current_user.id, StudyRecord.study_date == today)
        .first()
    )
    if record is None:
        record = StudyRecord(
            user_id=current_user.id,
            study_date=today,
            total_seconds=0,
            session_count=0,
        )
        db.add(record)
    else:
        record.updated_at = now
    record.total_seconds += duration
    record.session_count += 1

    db.commit()
    db.refresh(session)
    db.refresh(record)
    logger.info(
        "User %s ended study session %s after %s seconds", current_user.id, session.id, duration
    )
    return StudyEndResponse(
        session=StudySessionResponse.model_validate(session),
        total_duration_seconds=duration,
        daily_record=StudyRecordResponse.model_validate(record),
    )


@router.get("/current", response_model=StudyCurrentResponse)
async def current_session(current_user: CurrentUserDep, db: SessionDep) -> StudyCurrentResponse:
    """The caller's open session, if any, and seconds recorded today."""
    session = _open_session(db, current_user.id)
    record = (
        db.query(StudyRecord)
        .filter(
            StudyRecord.user_id == current_user.id,
            StudyRecord.study_date == utcnow().date(),
        )
        .first()
    )
    return StudyCurrentResponse(
        session=StudySessionResponse.model_validate(session) if session else None,
        today_total_seconds=record.total_seconds if record else 0,
    )


@router.get("/live", response_model=LiveStudyResponse)
async def live_sessions(db: SessionDep) -> LiveStudyResponse:
    """Everyone studying right now, most recently started first."""
    rows = (
        db.query(StudySession, Profile)
        .outerjoin(Profile, Profile.id == StudySession.user_id)
        .filter(StudySession.status == SESSION_STUDYING)
        .order_by(desc(StudySession.started_at), desc(StudySession.id))
        .all()
    )
    users = [
        LiveStudyUser(
            user_id=session.user_id,
            username=(profile.username if profile and profile.username else ANONYMOUS_NAME),
            school_name=profile.school_name if profile else None,
            major=profile.major if profile else None,
            session=LiveSession(
                id=session.id,
                started_at=session.started_at,
                paused_at=session.paused_at,
                accumulated_seconds=session.accumulated_seconds,
                study_subject=session.study_subject,
            ),
        )
        for session, profile in rows
    ]
    return LiveStudyResponse(studying_users=users, total_count=len(users))


@router.get("/records", response_model=StudyRecordsResponse)
async def list_records(
    current_user: CurrentUserDep,
    db: SessionDep,
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    year: int | None = Query(None, ge=1970, le=9999),
    month: int | None = Query(None, ge=1, le=12),
) -> StudyRecordsResponse:
    """Daily records, newest first, with totals and the longest streak.

    A complete ``start_date``/``end_date`` pair selects that range. Otherwise
    ``year`` and ``month`` together select a calendar month. With neither,
    every record is returned; a lone start or end date is ignored.
    """
    if start_date is not None and end_date is not None:
        bounds: tuple[date, date] | None = (start_date, end_date)
    elif year is not None and month is not None:
        bounds = month_bounds(year, month)
    else:
        bounds = None

    query = db.query(StudyRecord).filter(StudyRecord.user_id == current_user.id)
    if bounds is not None:
        query = query.filter(StudyRecord.study_date.between(*bounds))
    records = query.order_by(desc(StudyRecord.study_date)).all()

    total_seconds = sum(record.total_seconds for record in records)
    total_days = len(records)
    summary = StudySummary(
        total_days=total_days,
        total_seconds=total_seconds,
        average_seconds=total_seconds // total_days if total_days else 0,
        longest_streak=longest_streak(record.study_date for record in records),
    )
    return StudyRecordsResponse(
        records=[StudyRecordResponse.model_validate(record) for record in records],
        summary=summary,
    )
