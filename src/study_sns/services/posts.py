"""Post aggregates and cascading deletes shared by several routers."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from study_sns.models import (
    Comment,
    KnowledgeCard,
    Notification,
    Post,
    Report,
    Review,
)

from .hashtags import detach_hashtags


def useful_scores(db: Session, post_ids: list[int]) -> dict[int, int]:
    """Summed review score per post; posts without reviews map to 0."""
    if not post_ids:
        return {}
    rows = db.execute(
        select(Review.post_id, func.sum(Review.score))
        .where(Review.post_id.in_(post_ids))
        .group_by(Review.post_id)
    ).all()
    scores = {post_id: 0 for post_id in post_ids}
    for post_id, total in rows:
        scores[post_id] = int(total or 0)
    return scores


def delete_post(db: Session, post: Post) -> None:
    """Remove a post and every row hanging off it. Does not commit."""
    db.execute(delete(Review).where(Review.post_id == post.id))
    db.execute(delete(Report).where(Report.post_id == post.id))
    db.execute(delete(Comment).where(Comment.post_id == post.id))
    db.execute(delete(KnowledgeCard).where(KnowledgeCard.post_id == post.id))
    db.execute(delete(Notification).where(Notification.post_id == post.id))
    detach_hashtags(db, post.id)
    db.delete(post)
    db.flush()
