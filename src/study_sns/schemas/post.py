"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, description="Markdown content")
    board: str = Field(..., min_length=1, max_length=50)
    tag: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, description="Public URL returned by the upload endpoint")
    hashtags: list[str] = Field(default_factory=list, max_length=20)


class PostUpdate(BaseModel):
    """Schema for editing a post body."""

    content: str | None = None


class PostCreated(BaseModel):
    """Acknowledgement returned after creating a post."""

    message: str
    post_id: int = Field(..., serialization_alias="postId")


class PostResponse(BaseModel):
    """Post row as returned by the API."""

    id: int
    user_id: str
    title: str
    content: str
    board: str
    tag: str | None
    image_url: str | None
    is_solved: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PostDetail(PostResponse):
    """Post enriched with author, score and hashtag information."""

    username: str | None = None
    major: str | None = None
    useful_score: int = 0
    hashtags: list[str] = Field(default_factory=list)


class PostPage(BaseModel):
    """One page of the timeline."""

    items: list[PostDetail]
    page: int
    page_size: int
    total: int
    has_more: bool
