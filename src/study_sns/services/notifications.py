"""Notification fan-out for post activity."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from study_sns.models.notification import (
    NOTIFICATION_TYPE_ADOPTED,
    NOTIFICATION_TYPE_COMMENT,
    Notification,
)
from study_sns.models.post import Post
from study_sns.models.user import Profile

logger = logging.getLogger(__name__)


def notify_comment(db: Session, post: Post, commenter: Profile | None, commenter_id: str) -> Notification | None:
    """Tell the post author about a new comment.

    Skipped for comments on one's own post and for authors who turned
    comment notifications off.
    """
    if post.user_id == commenter_id:
        return None
    author_profile = db.get(Profile, post.user_id)
    if author_profile is not None and not author_profile.is_notify_comment:
        return None

    name = commenter.username if commenter is not None else "Someone"
    notification = Notification(
        user_id=post.user_id,
        actor_id=commenter_id,
        type=NOTIFICATION_TYPE_COMMENT,
        post_id=post.id,
        message=f"{name} commented on your post '{post.title}'",
    )
    db.add(notification)
    logger.debug("Queued comment notification for user %s on post %s", post.user_id, post.id)
    return notification


def notify_adopted(db: Session, post: Post, comment_author_id: str) -> Notification | None:
    """Tell a commenter their answer was accepted, unless they adopted their own."""
    if comment_author_id == post.user_id:
        return None
    notification = Notification(
        user_id=comment_author_id,
        actor_id=post.user_id,
        type=NOTIFICATION_TYPE_ADOPTED,
        post_id=post.id,
        message=f"Your answer on '{post.title}' was accepted",
    )
    db.add(notification)
    return notification
