"""Notification Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    """Single notification."""

    id: int
    user_id: str
    actor_id: str | None
    type: str
    post_id: int | None
    message: str
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationList(BaseModel):
    """Latest notifications plus the unread count for the header badge."""

    items: list[NotificationResponse]
    unread_count: int
