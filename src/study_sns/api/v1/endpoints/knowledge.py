# src/study_sns/api/v1/endpoints/knowledge.py
"""Knowledge card endpoints backed by Gemini."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Response, status
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError

from study_sns.api.v1.dependencies import AIClientDep, CurrentUserDep, SessionDep
from study_sns.models import KnowledgeCard, Post
from study_sns.schemas.knowledge import (
    KnowledgeCardResponse,
    KnowledgeGenerateRequest,
    KnowledgeGenerateResponse,
)
from study_sns.services.ai import AIServiceError
from study_sns.services.knowledge import generate_card_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


def _existing(card: KnowledgeCard) -> KnowledgeGenerateResponse:
    return KnowledgeGenerateResponse(
        message="A knowledge card already exists for this post",
        created=False,
        card_id=card.id,
    )


@router.post("/generate", response_model=KnowledgeGenerateResponse)
async def generate_card(
    payload: KnowledgeGenerateRequest,
    response: Response,
    current_user: CurrentUserDep,
    db: SessionDep,
    ai_client: AIClientDep,
) -> KnowledgeGenerateResponse:
    """Create the knowledge card for a post, or return the one that exists.

    Args:
        payload: Post to summarise
        response: Outgoing response, switched to 201 when a card is created
        current_user: Authenticated requester, recorded as the card owner
        db: Database session
        ai_client: Gemini client

    Returns:
        200 with ``created: false`` when a card exists, 201 with the new card otherwise

    Raises:
        HTTPException: 404 for an unknown post, 502 when generation fails
    """
    card = db.query(KnowledgeCard).filter(KnowledgeCard.post_id == payload.post_id).first()
    if card is not None:
        return _existing(card)

    post = db.get(Post, payload.post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )

    try:
        fields = await generate_card_fields(ai_client, post)
    except AIServiceError as exc:
        logger.error("Knowledge card generation for post %s failed: %s", post.id, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate knowledge card",
        ) from exc

    card = KnowledgeCard(post_id=post.id, user_id=current_user.id, **fields)
    db.add(card)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the card while we waited on the model.
        db.rollback()
        card = db.query(KnowledgeCard).filter(KnowledgeCard.post_id == post.id).one()
        return _existing(card)
    db.refresh(card)

    response.status_code = status.HTTP_201_CREATED
    return KnowledgeGenerateResponse(
        message="Knowledge card created",
        created=True,
        card_id=card.id,
        card=KnowledgeCardResponse.model_validate(card),
    )


@router.get("", response_model=list[KnowledgeCardResponse])
async def list_cards(
    current_user: CurrentUserDep,
    db: SessionDep,
    post_id: int | None = Query(None, description="Cards for this post; omit for your own cards"),
) -> list[KnowledgeCard]:
    """List knowledge cards, newest first."""
    query = db.query(KnowledgeCard)
    if post_id is not None:
        query = query.filter(KnowledgeCard.post_id == post_id)
    else:
        query = query.filter(KnowledgeCard.user_id == current_user.id)
    return query.order_by(desc(KnowledgeCard.created_at), desc(KnowledgeCard.id)).all()


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(card_id: int, current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete one's own knowledge card.

    Raises:
        HTTPException: 403 for another user's card, 404 if missing
    """
    card = db.get(KnowledgeCard, card_id)
    if card is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Knowledge card not found",
        )
    if card.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own knowledge cards",
        )
    db.delete(card)
    db.commit()
