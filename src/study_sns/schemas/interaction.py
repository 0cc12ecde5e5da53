"""Review and report Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class InteractionCreate(BaseModel):
    """Either a usefulness review or a report on a post."""

    type: str = Field(..., description="'review' or 'report'")
    post_id: int
    score: int | None = Field(None, ge=1, le=5)
    reason: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=2000)


class ReviewSummary(BaseModel):
    """Average and count of reviews on a post."""

    average: float
    count: int


class ReviewResult(ReviewSummary):
    """Response returned after a review is recorded."""

    message: str


class PostInteractionState(ReviewSummary):
    """Review aggregate plus the caller's own score (0 when none)."""

    my_score: int = Field(0, serialization_alias="myScore")


class ReportResult(BaseModel):
    """Acknowledgement returned after a report is filed."""

    message: str
    kind: Literal["report"] = "report"
