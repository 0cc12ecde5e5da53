"""Validation of base64 image payloads submitted for analysis."""

from __future__ import annotations

import base64
import binascii

from fastapi import status

from study_sns.core.settings import settings

CODE_INVALID_IMAGE = "INVALID_IMAGE"
CODE_IMAGE_TOO_LARGE = "IMAGE_TOO_LARGE"
CODE_PARSE_ERROR = "PARSE_ERROR"
CODE_SERVER_ERROR = "SERVER_ERROR"


class ImageValidationError(Exception):
    """Rejected image payload, carrying the HTTP status and error code."""

    def __init__(self, message: str, code: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


def estimated_size(image_b64: str) -> float:
    """Approximate decoded size of a base64 string."""
    return len(image_b64) * 3 / 4


def decode_image(image_b64: str, mime_type: str) -> bytes:
    """Check MIME type and size, then decode the payload.

    Raises:
        ImageValidationError: 400 for a bad type or undecodable data, 413 when too large
    """
    if not image_b64 or not mime_type:
        raise ImageValidationError(
            "Image data is required", CODE_INVALID_IMAGE, status.HTTP_400_BAD_REQUEST
        )
    if mime_type not in settings.allowed_image_types:
        raise ImageValidationError(
            "Unsupported image type (JPG, PNG, WebP and GIF are accepted)",
            CODE_INVALID_IMAGE,
            status.HTTP_400_BAD_REQUEST,
        )
    if estimated_size(image_b64) > settings.max_image_bytes:
        limit_mb = settings.max_image_bytes // (1024 * 1024)
        raise ImageValidationError(
            f"Image is too large (max {limit_mb}MB)",
            CODE_IMAGE_TOO_LARGE,
            413,
        )
    try:
        return base64.b64decode(image_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageValidationError(
            "Image data is not valid base64", CODE_INVALID_IMAGE, status.HTTP_400_BAD_REQUEST
        ) from exc
