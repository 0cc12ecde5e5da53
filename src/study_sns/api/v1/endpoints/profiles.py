# src/study_sns/api/v1/endpoints/profiles.py
"""My page, public profile and account settings endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import delete, desc, update
from sqlalchemy.orm import Session

from study_sns.api.v1.dependencies import CurrentUserDep, SessionDep
from study_sns.db.time import utcnow
from study_sns.models import (
    Comment,
    KnowledgeCard,
    Notification,
    Post,
    Profile,
    Report,
    Review,
    Schedule,
    StudyRecord,
    StudySession,
    User,
)
from study_sns.schemas.post import PostResponse
from study_sns.schemas.user import (
    ProfileOverview,
    ProfileResponse,
    ProfileUpdateRequest,
    SettingsUpdateRequest,
)
from study_sns.services.posts import delete_post, useful_scores

logger = logging.getLogger(__name__)

router = APIRouter(tags=["profiles"])


def _overview(db: Session, profile: Profile) -> ProfileOverview:
    posts = (
        db.query(Post)
        .filter(Post.user_id == profile.id)
        .order_by(desc(Post.created_at), desc(Post.id))
        .all()
    )
    scores = useful_scores(db, [post.id for post in posts])
    return ProfileOverview(
        profile=ProfileResponse.model_validate(profile),
        posts=[PostResponse.model_validate(post) for post in posts],
        total_score=sum(scores.values()),
        post_count=len(posts),
    )


def _require_profile(db: Session, user_id: str) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return profile


@router.get("/mypage", response_model=ProfileOverview)
async def get_mypage(current_user: CurrentUserDep, db: SessionDep) -> ProfileOverview:
    """Return the caller's profile, posts and total useful score."""
    return _overview(db, _require_profile(db, current_user.id))


@router.put("/mypage", response_model=ProfileResponse)
async def update_mypage(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Profile:
    """Update the editable profile fields.

    Raises:
        HTTPException: 409 if the new username belongs to someone else
    """
    profile = _require_profile(db, current_user.id)
    changes = payload.model_dump(exclude_unset=True)

    username = changes.get("username")
    if username and username != profile.username:
        taken = db.query(Profile).filter(Profile.username == username).first()
        if taken is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username is already taken",
            )

    for field, value in changes.items():
        if field == "username" and not value:
            continue
        setattr(profile, field, value)
    profile.updated_at = utcnow()
    db.commit()
    db.refresh(profile)
    return profile


@router.get("/profiles/{user_id}", response_model=ProfileOverview)
async def get_profile(user_id: str, db: SessionDep) -> ProfileOverview:
    """Public profile page for any user."""
    return _overview(db, _require_profile(db, user_id))


@router.put("/settings", response_model=ProfileResponse)
async def update_settings(
    payload: SettingsUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Profile:
    """Toggle comment notifications and marketing consent."""
    profile = _require_profile(db, current_user.id)
    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(profile, field, value)
    profile.updated_at = utcnow()
    db.commit()
    db.refresh(profile)
    return profile


@router.delete("/settings", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete the caller's account and everything it owns.

    Args:
        current_user: Authenticated user
        db: Database session
    """
    user_id = current_user.id

    for post in db.query(Post).filter(Post.user_id == user_id).all():
        delete_post(db, post)

    db.execute(delete(Comment).where(Comment.user_id == user_id))
    db.execute(delete(Review).where(Review.user_id == user_id))
    db.execute(delete(Report).where(Report.reporter_id == user_id))
    db.execute(delete(KnowledgeCard).where(KnowledgeCard.user_id == user_id))
    db.execute(delete(Notification).where(Notification.user_id == user_id))
    db.execute(
        update(Notification).where(Notification.actor_id == user_id).values(actor_id=None)
    )
    db.execute(delete(Schedule).where(Schedule.user_id == user_id))
    db.execute(delete(StudySession).where(StudySession.user_id == user_id))
    db.execute(delete(StudyRecord).where(StudyRecord.user_id == user_id))

    user = db.get(User, user_id)
    if user is not None:
        db.delete(user)
    db.commit()
    logger.info("Deleted account %s", user_id)
