# src/study_sns/api/v1/endpoints/interactions.py
"""Usefulness reviews and reports on posts."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from study_sns.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from study_sns.db.time import utcnow
from study_sns.models import Post, Report, Review
from study_sns.schemas.interaction import (
    InteractionCreate,
    PostInteractionState,
    ReportResult,
    ReviewResult,
    ReviewSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interactions", tags=["interactions"])

INTERACTION_REVIEW = "review"
INTERACTION_REPORT = "report"


def review_summary(db: Session, post_id: int) -> ReviewSummary:
    """Average (one decimal) and count of reviews on a post."""
    average, count = (
        db.query(func.avg(Review.score), func.count(Review.id))
        .filter(Review.post_id == post_id)
        .one()
    )
    return ReviewSummary(
        average=round(float(average), 1) if average is not None else 0.0,
        count=int(count or 0),
    )


def _find_review(db: Session, user_id: str, post_id: int) -> Review | None:
    return (
        db.query(Review)
        .filter(Review.user_id == user_id, Review.post_id == post_id)
        .first()
    )


def _save_review(db: Session, user_id: str, post_id: int, score: int) -> None:
    """Insert or update the caller's review.

    A concurrent insert of the same (user, post) review trips the unique
    constraint; the savepoint is rolled back and the row is updated instead.
    """
    review = _find_review(db, user_id, post_id)
    if review is None:
        try:
            with db.begin_nested():
                db.add(Review(user_id=user_id, post_id=post_id, score=score))
            return
        except IntegrityError:
            review = _find_review(db, user_id, post_id)
            if review is None:
                raise
            logger.info("Review by %s on post %s was inserted concurrently", user_id, post_id)
    review.score = score
    review.updated_at = utcnow()


@router.post("", response_model=ReviewResult | ReportResult)
async def create_interaction(
    payload: InteractionCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReviewResult | ReportResult:
    """Rate a post or report it.

    A repeat review from the same user replaces the earlier score.

    Args:
        payload: Interaction type and its fields
        current_user: Authenticated user
        db: Database session

    Returns:
        Review aggregate for reviews, an acknowledgement for reports

    Raises:
        HTTPException: 400 for an unknown type or missing fields, 403 on one's
            own post, 404 if the post does not exist
    """
    post = db.get(Post, payload.post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    if post.user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot review or report your own post",
        )

    if payload.type not in (INTERACTION_REVIEW, INTERACTION_REPORT):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unknown interaction type",
        )

    if payload.type == INTERACTION_REPORT:
        reason = (payload.reason or "").strip()
        if not reason:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A report reason is required",
            )
        db.add(
            Report(
                reporter_id=current_user.id,
                post_id=post.id,
                reason=reason,
                description=payload.description,
            )
        )
        db.commit()
        logger.info("User %s reported post %s (%s)", current_user.id, post.id, reason)
        return ReportResult(message="Report submitted")

    if payload.score is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A score between 1 and 5 is required",
        )

    _save_review(db, current_user.id, post.id, payload.score)
    db.commit()

    summary = review_summary(db, post.id)
    return ReviewResult(message="Review saved", average=summary.average, count=summary.count)


@router.get("", response_model=PostInteractionState)
async def get_interactions(
    current_user: OptionalUserDep,
    db: SessionDep,
    post_id: int = Query(..., description="Post to summarise"),
) -> PostInteractionState:
    """Review aggregate for a post plus the caller's own score."""
    summary = review_summary(db, post_id)
    my_score = 0
    if current_user is not None:
        mine = (
            db.query(Review.score)
            .filter(Review.user_id == current_user.id, Review.post_id == post_id)
            .scalar()
        )
        my_score = mine or 0
    return PostInteractionState(average=summary.average, count=summary.count, my_score=my_score)
