"""Hashtag normalisation and post linking."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from study_sns.models.post import Hashtag, PostHashtag


def normalize_hashtags(names: Iterable[str]) -> list[str]:
    """Strip ``#`` and whitespace, drop blanks and duplicates, keep first-seen order."""
    seen: set[str] = set()
    result = []
    for name in names:
        cleaned = name.strip().lstrip("#").strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            result.append(cleaned)
    return result


def attach_hashtags(db: Session, post_id: int, names: Iterable[str]) -> list[str]:
    """Find or create each hashtag, bump its count and link it to the post."""
    attached = normalize_hashtags(names)
    for name in attached:
        tag = db.execute(select(Hashtag).where(Hashtag.name == name)).scalar_one_or_none()
        if tag is None:
            tag = Hashtag(name=name, count=0)
            db.add(tag)
            db.flush()
        tag.count += 1
        db.add(PostHashtag(post_id=post_id, hashtag_id=tag.id))
    db.flush()
    return attached


def detach_hashtags(db: Session, post_id: int) -> None:
    """Unlink every hashtag from the post, decrementing counts with a floor of zero."""
    links = db.execute(select(PostHashtag).where(PostHashtag.post_id == post_id)).scalars().all()
    for link in links:
        tag = db.get(Hashtag, link.hashtag_id)
        if tag is not None:
            tag.count = max(0, tag.count - 1)
        db.delete(link)
    db.flush()


def hashtags_for_posts(db: Session, post_ids: list[int]) -> dict[int, list[str]]:
    """Map each post id to its hashtag names."""
    if not post_ids:
        return {}
    rows = db.execute(
        select(PostHashtag.post_id, Hashtag.name)
        .join(Hashtag, Hashtag.id == PostHashtag.hashtag_id)
        .where(PostHashtag.post_id.in_(post_ids))
        .order_by(Hashtag.name)
    ).all()
    mapping: dict[int, list[str]] = {post_id: [] for post_id in post_ids}
    for post_id, name in rows:
        mapping[post_id].append(name)
    return mapping
