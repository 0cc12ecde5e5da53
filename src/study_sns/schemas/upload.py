"""Upload Pydantic schemas."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Stored object location."""

    url: str
    key: str
