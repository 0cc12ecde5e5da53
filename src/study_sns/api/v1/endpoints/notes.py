# src/study_sns/api/v1/endpoints/notes.py
"""Study-note image analysis."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from study_sns.api.v1.dependencies import AIClientDep, CurrentUserDep
from study_sns.schemas.note import ImageAnalysisRequest, NoteAnalysisResponse, NoteData
from study_sns.services.ai import AIResponseParseError, AIServiceError
from study_sns.services.images import (
    CODE_PARSE_ERROR,
    CODE_SERVER_ERROR,
    ImageValidationError,
    decode_image,
)
from study_sns.services.note_analysis import analyze_note

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


def analysis_error(status_code: int, message: str, code: str) -> HTTPException:
    """HTTP error carrying a machine-readable code for the image analysis routes."""
    return HTTPException(status_code=status_code, detail={"error": message, "code": code})


@router.post("/analyze", response_model=NoteAnalysisResponse)
async def analyze(
    payload: ImageAnalysisRequest,
    current_user: CurrentUserDep,
    ai_client: AIClientDep,
) -> NoteAnalysisResponse:
    """Turn a photographed note into Markdown with a title, summary and hashtags.

    Args:
        payload: Base64 image and its MIME type
        current_user: Authenticated user
        ai_client: Gemini client

    Returns:
        The extracted note, or ``data: null`` when the image holds no note

    Raises:
        HTTPException: 400 ``INVALID_IMAGE``, 413 ``IMAGE_TOO_LARGE``,
            502 ``PARSE_ERROR`` or ``SERVER_ERROR``
    """
    try:
        image = decode_image(payload.image, payload.mime_type)
    except ImageValidationError as exc:
        raise analysis_error(exc.status_code, exc.message, exc.code) from exc

    try:
        result = await analyze_note(ai_client, image, payload.mime_type)
    except AIResponseParseError as exc:
        logger.warning("Note analysis reply for user %s was not JSON", current_user.id)
        raise analysis_error(
            status.HTTP_502_BAD_GATEWAY,
            "Could not read a note from this image, please try another one",
            CODE_PARSE_ERROR,
        ) from exc
    except AIServiceError as exc:
        logger.error("Note analysis failed for user %s: %s", current_user.id, exc)
        raise analysis_error(status.HTTP_502_BAD_GATEWAY, str(exc), CODE_SERVER_ERROR) from exc

    if result.note is None:
        return NoteAnalysisResponse(data=None, message="No note content was found in the image")

    return NoteAnalysisResponse(
        data=NoteData(**result.note),
        message="Note analysed",
        refined=result.refined,
    )
