"""Study-note image analysis schemas."""

from pydantic import BaseModel, Field


class ImageAnalysisRequest(BaseModel):
    """Base64-encoded image submitted for AI analysis."""

    image: str = Field(..., description="Base64 image payload without data: prefix")
    mime_type: str = Field(..., description="image/jpeg, image/png, image/webp or image/gif")


class NoteData(BaseModel):
    """Normalised note extracted from an image."""

    title: str
    content: str
    summary: str = ""
    hashtags: list[str] = Field(default_factory=list)
    subject: str = "기타"
    confidence: float = Field(0.5, ge=0.0, le=1.0)


class NoteAnalysisResponse(BaseModel):
    """Note analysis outcome; ``data`` is null when no note was recognised."""

    success: bool = True
    data: NoteData | None
    message: str
    refined: bool = False
