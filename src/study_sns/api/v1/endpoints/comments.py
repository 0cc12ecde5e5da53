# src/study_sns/api/v1/endpoints/comments.py
"""Comment endpoints, including adopting an accepted answer."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import desc
from sqlalchemy.orm import Session

from study_sns.api.v1.dependencies import CurrentUserDep, SessionDep
from study_sns.db.time import utcnow
from study_sns.models import Comment, Post, Profile
from study_sns.schemas.comment import (
    CommentAuthor,
    CommentCreate,
    CommentResponse,
    CommentUpdate,
)
from study_sns.services.notifications import notify_adopted, notify_comment

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["comments"])


def _to_response(comment: Comment, author: Profile | None) -> CommentResponse:
    response = CommentResponse.model_validate(comment)
    if author is not None:
        response.profiles = CommentAuthor(
            username=author.username,
            school_name=author.school_name,
            major=author.major,
        )
    return response


def _get_comment_or_404(db: Session, comment_id: int) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found",
        )
    return comment


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    db: SessionDep,
    post_id: int | None = Query(None, description="Post whose comments to list"),
) -> list[CommentResponse]:
    """List a post's comments: accepted answers first, then oldest first.

    Raises:
        HTTPException: 400 if post_id is missing
    """
    if post_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="post_id is required",
        )

    rows = (
        db.query(Comment, Profile)
        .outerjoin(Profile, Profile.id == Comment.user_id)
        .filter(Comment.post_id == post_id)
        .order_by(desc(Comment.is_accepted), Comment.created_at, Comment.id)
        .all()
    )
    return [_to_response(comment, author) for comment, author in rows]


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a post and notify its author.

    Args:
        payload: Target post and comment text
        current_user: Authenticated commenter
        db: Database session

    Returns:
        The stored comment with author fields

    Raises:
        HTTPException: 404 if the post does not exist, 422 for blank content
    """
    post = db.get(Post, payload.post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    content = payload.content.strip()
    if not content:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Comment must not be empty",
        )

    comment = Comment(post_id=post.id, user_id=current_user.id, content=content)
    db.add(comment)
    commenter = db.get(Profile, current_user.id)
    notify_comment(db, post, commenter, current_user.id)
    db.commit()
    db.refresh(comment)
    return _to_response(comment, commenter)


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Edit a comment, or adopt it as the post's accepted answer.

    Only the post author may adopt; only the comment author may edit.

    Raises:
        HTTPException: 400 for an edit without content, 403 for the wrong user, 404 if missing
    """
    comment = _get_comment_or_404(db, comment_id)

    if payload.action == "adopt":
        post = db.get(Post, comment.post_id)
        if post is None or post.user_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the post author can accept an answer",
            )
        comment.is_accepted = True
        comment.updated_at = utcnow()
        post.is_solved = True
        notify_adopted(db, post, comment.user_id)
        logger.info("Comment %s adopted on post %s", comment.id, post.id)
    else:
        if comment.user_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only edit your own comments",
            )
        if payload.content is None or not payload.content.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Content must not be empty",
            )
        comment.content = payload.content.strip()
        comment.updated_at = utcnow()

    db.commit()
    db.refresh(comment)
    return _to_response(comment, db.get(Profile, comment.user_id))


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: int, current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete one's own comment."""
    comment = _get_comment_or_404(db, comment_id)
    if comment.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own comments",
        )
    db.delete(comment)
    db.commit()
