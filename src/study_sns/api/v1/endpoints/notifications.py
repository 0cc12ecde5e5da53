# src/study_sns/api/v1/endpoints/notifications.py
"""Notification inbox endpoints."""

from fastapi import APIRouter
from sqlalchemy import desc, update

from study_sns.api.v1.dependencies import CurrentUserDep, SessionDep
from study_sns.core.settings import settings
from study_sns.models import Notification
from study_sns.schemas.notification import NotificationList, NotificationResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationList)
async def list_notifications(current_user: CurrentUserDep, db: SessionDep) -> NotificationList:
    """Latest notifications, newest first, with the unread count."""
    items = (
        db.query(Notification)
        .filter(Notification.user_id == current_user.id)
        .order_by(desc(Notification.created_at), desc(Notification.id))
        .limit(settings.notifications_limit)
        .all()
    )
    unread = (
        db.query(Notification)
        .filter(Notification.user_id == current_user.id, Notification.is_read.is_(False))
        .count()
    )
    return NotificationList(
        items=[NotificationResponse.model_validate(item) for item in items],
        unread_count=unread,
    )


@router.patch("")
async def mark_all_read(current_user: CurrentUserDep, db: SessionDep) -> dict[str, int]:
    """Mark every unread notification as read."""
    result = db.execute(
        update(Notification)
        .where(Notification.user_id == current_user.id, Notification.is_read.is_(False))
        .values(is_read=True)
    )
    db.commit()
    return {"updated": result.rowcount or 0}
