# src/study_sns/api/v1/endpoints/uploads.py
"""Image upload endpoint for post attachments."""

from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from study_sns.api.v1.dependencies import CurrentUserDep, ImageStorageDep
from study_sns.core.settings import settings
from study_sns.schemas.upload import UploadResponse
from study_sns.services.storage import StorageError

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/images", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    current_user: CurrentUserDep,
    storage: ImageStorageDep,
    file: UploadFile = File(...),
) -> UploadResponse:
    """Store an image in the post image bucket and return its public URL.

    Args:
        current_user: Authenticated uploader
        storage: Bucket client
        file: Multipart image file

    Returns:
        Public URL and object key

    Raises:
        HTTPException: 400 for an unsupported type, 413 above the size
            limit, 502 if the bucket rejects the write
    """
    content_type = file.content_type or ""
    if content_type not in settings.allowed_image_types:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported image type (JPG, PNG, WebP and GIF are accepted)",
        )

    data = await file.read(settings.max_image_bytes + 1)
    if len(data) > settings.max_image_bytes:
        raise HTTPException(status_code=413, detail="Image is too large")
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty",
        )

    try:
        url, key = storage.upload_image(current_user.id, data, content_type)
    except StorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to store image",
        ) from exc
    return UploadResponse(url=url, key=key)
