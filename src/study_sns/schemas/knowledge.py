"""Knowledge card Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class KnowledgeGenerateRequest(BaseModel):
    """Request to derive a knowledge card from a post."""

    post_id: int


class KnowledgeCardResponse(BaseModel):
    """Stored knowledge card."""

    id: int
    post_id: int
    user_id: str
    title: str
    summary: str
    category: str | None
    keywords: list[str] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class KnowledgeGenerateResponse(BaseModel):
    """Result of a generate call; ``created`` is False when a card already existed."""

    message: str
    created: bool
    card_id: int
    card: KnowledgeCardResponse | None = None
