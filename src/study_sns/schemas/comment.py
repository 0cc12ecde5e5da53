"""Comment-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for creating a comment."""

    post_id: int
    content: str = Field(..., min_length=1, max_length=5000)


class CommentUpdate(BaseModel):
    """Edit a comment body, or adopt it as the accepted answer."""

    action: Literal["edit", "adopt"] = "edit"
    content: str | None = Field(None, min_length=1, max_length=5000)


class CommentAuthor(BaseModel):
    """Author fields shown beside a comment."""

    username: str | None = None
    school_name: str | None = None
    major: str | None = None


class CommentResponse(BaseModel):
    """Comment as returned by the API."""

    id: int
    post_id: int
    user_id: str
    content: str
    is_accepted: bool
    created_at: datetime
    updated_at: datetime | None = None
    profiles: CommentAuthor | None = None

    model_config = ConfigDict(from_attributes=True)
