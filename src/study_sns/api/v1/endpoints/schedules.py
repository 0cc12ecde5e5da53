# src/study_sns/api/v1/endpoints/schedules.py
"""Class timetable endpoints, including timetable image analysis."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import delete
from sqlalchemy.orm import Session

from study_sns.api.v1.dependencies import AIClientDep, CurrentUserDep, SessionDep
from study_sns.core.settings import settings
from study_sns.models import Schedule
from study_sns.schemas.schedule import (
    ExtractedSchedule,
    ScheduleAnalysisRequest,
    ScheduleAnalysisResponse,
    ScheduleBulkCreate,
    ScheduleCreate,
    ScheduleResponse,
    ScheduleUpdate,
)
from study_sns.services.ai import AIResponseParseError, AIServiceError, image_part, parse_json_reply
from study_sns.services.images import (
    CODE_PARSE_ERROR,
    CODE_SERVER_ERROR,
    ImageValidationError,
    decode_image,
)
from study_sns.services.prompts import SCHEDULE_ANALYSIS_PROMPT
from study_sns.services.timetable import (
    day_index,
    normalize_extracted,
    normalize_time,
    period_table,
    validate_day,
)

from .notes import analysis_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["schedules"])


def _check_order(start_time: str, end_time: str) -> None:
    if end_time <= start_time:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_time must be later than start_time",
        )


def _get_owned(db: Session, schedule_id: int, user_id: str) -> Schedule:
    schedule = db.get(Schedule, schedule_id)
    if schedule is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Schedule not found",
        )
    if schedule.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only change your own schedules",
        )
    return schedule


def _new_schedule(user_id: str, item: ScheduleCreate) -> Schedule:
    _check_order(item.start_time, item.end_time)
    return Schedule(
        user_id=user_id,
        title=item.title,
        day_of_week=item.day_of_week,
        start_time=item.start_time,
        end_time=item.end_time,
        location=item.location,
    )


@router.get("", response_model=list[ScheduleResponse])
async def list_schedules(current_user: CurrentUserDep, db: SessionDep) -> list[Schedule]:
    """The caller's timetable, Monday first and by start time within a day."""
    rows = db.query(Schedule).filter(Schedule.user_id == current_user.id).all()
    return sorted(rows, key=lambda s: (day_index(s.day_of_week), s.start_time, s.id))


@router.post("", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED)
async def create_schedule(
    payload: ScheduleCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Schedule:
    """Add one class slot.

    Raises:
        HTTPException: 400 if end_time is not after start_time
    """
    schedule = _new_schedule(current_user.id, payload)
    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    return schedule


@router.post("/bulk", status_code=status.HTTP_201_CREATED)
async def bulk_create_schedules(
    payload: ScheduleBulkCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, object]:
    """Save several slots at once, optionally replacing the whole timetable.

    Args:
        payload: Entries to save and whether to clear existing ones first
        current_user: Authenticated user
        db: Database session

    Returns:
        Number of saved entries and a message
    """
    schedules = [_new_schedule(current_user.id, item) for item in payload.schedules]
    if payload.replace_existing:
        db.execute(delete(Schedule).where(Schedule.user_id == current_user.id))
    db.add_all(schedules)
    db.commit()
    return {"count": len(schedules), "message": f"Saved {len(schedules)} schedules"}


@router.patch("/{schedule_id}", response_model=ScheduleResponse)
async def update_schedule(
    schedule_id: int,
    payload: ScheduleUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Schedule:
    """Partially update one of the caller's slots.

    Raises:
        HTTPException: 400 for an empty update, an invalid day or time, or an
            end before the start; 403 for another user's slot; 404 if missing
    """
    schedule = _get_owned(db, schedule_id, current_user.id)

    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )

    try:
        if "day_of_week" in changes:
            changes["day_of_week"] = validate_day(changes["day_of_week"] or "")
        for field in ("start_time", "end_time"):
            if field in changes:
                changes[field] = normalize_time(changes[field] or "")
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    if "title" in changes:
        title = (changes["title"] or "").strip()
        if not title:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Title must not be blank",
            )
        changes["title"] = title
    if "location" in changes:
        changes["location"] = (changes["location"] or "").strip() or None

    _check_order(
        changes.get("start_time", schedule.start_time),
        changes.get("end_time", schedule.end_time),
    )
    for field, value in changes.items():
        setattr(schedule, field, value)
    db.commit()
    db.refresh(schedule)
    return schedule


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedule(schedule_id: int, current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete one of the caller's slots."""
    schedule = _get_owned(db, schedule_id, current_user.id)
    db.delete(schedule)
    db.commit()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_schedules(current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete the caller's whole timetable."""
    db.execute(delete(Schedule).where(Schedule.user_id == current_user.id))
    db.commit()


@router.post("/analyze", response_model=ScheduleAnalysisResponse)
async def analyze_timetable(
    payload: ScheduleAnalysisRequest,
    current_user: CurrentUserDep,
    ai_client: AIClientDep,
) -> ScheduleAnalysisResponse:
    """Extract class slots from a timetable screenshot.

    Nothing is saved; the client confirms the slots and posts them to ``/bulk``.

    Raises:
        HTTPException: 400 ``INVALID_IMAGE``, 413 ``IMAGE_TOO_LARGE``,
            502 ``PARSE_ERROR`` or ``SERVER_ERROR``
    """
    try:
        image = decode_image(payload.image, payload.mime_type)
    except ImageValidationError as exc:
        raise analysis_error(exc.status_code, exc.message, exc.code) from exc

    prompt = SCHEDULE_ANALYSIS_PROMPT.format(period_table=period_table(payload.first_period_start))
    try:
        reply = await ai_client.generate(
            settings.gemini_vision_model, [prompt, image_part(image, payload.mime_type)]
        )
        data = parse_json_reply(reply)
    except AIResponseParseError as exc:
        logger.warning("Timetable analysis reply for user %s was not JSON", current_user.id)
        raise analysis_error(
            status.HTTP_502_BAD_GATEWAY,
            "Could not read a timetable from this image, please try another one",
            CODE_PARSE_ERROR,
        ) from exc
    except AIServiceError as exc:
        logger.error("Timetable analysis failed for user %s: %s", current_user.id, exc)
        raise analysis_error(status.HTTP_502_BAD_GATEWAY, str(exc), CODE_SERVER_ERROR) from exc

    schedules = [ExtractedSchedule(**item) for item in normalize_extracted(data.get("schedules"))]
    notes = data.get("notes") or data.get("analysis_notes")
    if not schedules:
        message = "No classes were found in the image"
    else:
        message = f"Found {len(schedules)} classes"
    return ScheduleAnalysisResponse(
        schedules=schedules, message=message, notes=str(notes) if notes else None
    )
