# src/study_sns/api/v1/endpoints/posts.py
"""Post-related endpoints for the Study SNS API."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import desc, func, or_
from sqlalchemy.orm import Session

from study_sns.api.v1.dependencies import CurrentUserDep, SessionDep
from study_sns.core.settings import settings
from study_sns.db.time import utcnow
from study_sns.models import Hashtag, Post, PostHashtag, Profile, Review
from study_sns.schemas.post import (
    PostCreate,
    PostCreated,
    PostDetail,
    PostPage,
    PostUpdate,
)
from study_sns.services.hashtags import attach_hashtags, hashtags_for_posts
from study_sns.services.posts import delete_post, useful_scores

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])

MAX_PAGE_SIZE = 100
BOARD_ALL = "all"


def _enrich(db: Session, posts: list[Post]) -> list[PostDetail]:
    """Attach author, useful score and hashtags to each post."""
    post_ids = [post.id for post in posts]
    author_ids = {post.user_id for post in posts}
    authors = {
        profile.id: profile
        for profile in db.query(Profile).filter(Profile.id.in_(author_ids)).all()
    } if author_ids else {}
    scores = useful_scores(db, post_ids)
    tags = hashtags_for_posts(db, post_ids)

    details = []
    for post in posts:
        author = authors.get(post.user_id)
        detail = PostDetail.model_validate(post)
        detail.username = author.username if author else None
        detail.major = author.major if author else None
        detail.useful_score = scores.get(post.id, 0)
        detail.hashtags = tags.get(post.id, [])
        details.append(detail)
    return details


def _get_post_or_404(db: Session, post_id: int) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post


@router.post("", response_model=PostCreated, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostCreated:
    """Create a post and link its hashtags.

    Args:
        post_data: Post content and metadata
        current_user: Authenticated author
        db: Database session

    Returns:
        Confirmation with the new post id
    """
    post = Post(
        user_id=current_user.id,
        title=post_data.title,
        content=post_data.content,
        board=post_data.board,
        tag=post_data.tag,
        image_url=post_data.image_url,
    )
    db.add(post)
    db.flush()

    attach_hashtags(db, post.id, post_data.hashtags)
    db.commit()
    logger.info("User %s created post %s", current_user.id, post.id)
    return PostCreated(message="Post created", post_id=post.id)


@router.get("", response_model=PostPage)
async def list_posts(
    db: SessionDep,
    board: str | None = Query(None, description="Board name; 'all' disables the filter"),
    hashtag: str | None = Query(None, description="Only posts carrying this hashtag"),
    sort: Literal["latest", "useful"] = Query("latest"),
    page: int = Query(0, ge=0, description="Zero-based page index"),
    page_size: int = Query(
        settings.posts_page_size, ge=1, description="Items per page (capped at 100)"
    ),
) -> PostPage:
    """List posts with optional board and hashtag filters.

    Args:
        db: Database session
        board: Board filter
        hashtag: Hashtag name filter, with or without a leading ``#``
        sort: ``latest`` (newest first) or ``useful`` (summed review score, then newest)
        page: Zero-based page index
        page_size: Number of items per page

    Returns:
        One page of enriched posts
    """
    page_size = min(page_size, MAX_PAGE_SIZE)
    query = db.query(Post)

    if board and board != BOARD_ALL:
        query = query.filter(Post.board == board)

    if hashtag:
        name = hashtag.strip().lstrip("#").strip()
        query = (
            query.join(PostHashtag, PostHashtag.post_id == Post.id)
            .join(Hashtag, Hashtag.id == PostHashtag.hashtag_id)
            .filter(Hashtag.name == name)
        )

    total = query.count()

    if sort == "useful":
        score_subq = (
            db.query(Review.post_id, func.sum(Review.score).label("score"))
            .group_by(Review.post_id)
            .subquery()
        )
        query = query.outerjoin(score_subq, score_subq.c.post_id == Post.id).order_by(
            desc(func.coalesce(score_subq.c.score, 0)),
            desc(Post.created_at),
            desc(Post.id),
        )
    else:
        query = query.order_by(desc(Post.created_at), desc(Post.id))

    posts = query.offset(page * page_size).limit(page_size).all()
    return PostPage(
        items=_enrich(db, posts),
        page=page,
        page_size=page_size,
        total=total,
        has_more=(page + 1) * page_size < total,
    )


@router.get("/search", response_model=list[PostDetail])
async def search_posts(
    db: SessionDep,
    q: str = Query("", description="Case-insensitive text to look for"),
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
) -> list[PostDetail]:
    """Search titles, bodies and tags.

    Raises:
        HTTPException: 400 if the query is blank
    """
    term = q.strip()
    if not term:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )

    pattern = f"%{term.lower()}%"
    posts = (
        db.query(Post)
        .filter(
            or_(
                func.lower(Post.title).like(pattern),
                func.lower(Post.content).like(pattern),
                func.lower(Post.tag).like(pattern),
            )
        )
        .order_by(desc(Post.created_at), desc(Post.id))
        .limit(limit)
        .all()
    )
    return _enrich(db, posts)


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(post_id: int, db: SessionDep) -> PostDetail:
    """Get a single post by id."""
    return _enrich(db, [_get_post_or_404(db, post_id)])[0]


@router.patch("/{post_id}", response_model=PostDetail)
async def update_post(
    post_id: int,
    payload: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostDetail:
    """Edit the body of one's own post.

    Raises:
        HTTPException: 400 for empty content, 403 for another user's post, 404 if missing
    """
    post = _get_post_or_404(db, post_id)
    if post.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only edit your own posts",
        )
    if payload.content is None or not payload.content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Content must not be empty",
        )

    post.content = payload.content
    post.updated_at = utcnow()
    db.commit()
    db.refresh(post)
    return _enrich(db, [post])[0]


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete one's own post with its comments, reviews, reports, card and hashtag links.

    Raises:
        HTTPException: 403 for another user's post, 404 if missing
    """
    post = _get_post_or_404(db, post_id)
    if post.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own posts",
        )
    delete_post(db, post)
    db.commit()
    logger.info("User %s deleted post %s", current_user.id, post_id)
