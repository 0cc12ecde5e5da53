# src/study_sns/api/v1/endpoints/hashtags.py
"""Hashtag endpoints."""

from fastapi import APIRouter, Query
from sqlalchemy import desc

from study_sns.api.v1.dependencies import SessionDep
from study_sns.models import Hashtag

router = APIRouter(prefix="/hashtags", tags=["hashtags"])


@router.get("/popular", response_model=list[str])
async def popular_hashtags(
    db: SessionDep,
    limit: int = Query(10, ge=1, le=50),
) -> list[str]:
    """Most used hashtag names, highest count first."""
    rows = (
        db.query(Hashtag.name)
        .filter(Hashtag.count > 0)
        .order_by(desc(Hashtag.count), Hashtag.name)
        .limit(limit)
        .all()
    )
    return [name for (name,) in rows]
