"""Gemini client wrapper used by knowledge cards, notes and timetables."""

from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from typing import Any

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from study_sns.core.settings import settings

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

ContentPart = str | dict[str, Any]


class AIServiceError(Exception):
    """Raised when the generative model cannot produce a reply."""


class AIResponseParseError(AIServiceError):
    """Raised when a model reply is not the JSON object we asked for."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


def image_part(data: bytes, mime_type: str) -> dict[str, Any]:
    """Build an inline image part for a multimodal request."""
    return {"mime_type": mime_type, "data": data}


def parse_json_reply(text: str) -> dict[str, Any]:
    """Strip Markdown code fences from a reply and decode the JSON object in it.

    Raises:
        AIResponseParseError: If the cleaned text is not a JSON object
    """
    cleaned = _FENCE_RE.sub("", text or "").strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise AIResponseParseError("Model reply is not valid JSON", raw_text=text) from exc
    if not isinstance(data, dict):
        raise AIResponseParseError("Model reply is not a JSON object", raw_text=text)
    return data


class GeminiClient:
    """
    Thin async wrapper over ``google-generativeai``.

    Usage:
        client = GeminiClient(api_key=settings.gemini_api_key)
        text = await client.generate("gemini-2.5-flash", [prompt, image_part(data, "image/png")])
    """

    def __init__(self, api_key: str | None) -> None:
        self._api_key = api_key
        self._configured = False

    def _ensure_configured(self) -> None:
        if not self._api_key:
            raise AIServiceError("GEMINI_API_KEY is not configured")
        if not self._configured:
            genai.configure(api_key=self._api_key)
            self._configured = True

    async def generate(self, model: str, parts: list[ContentPart]) -> str:
        """Send the prompt parts to ``model`` and return the reply text.

        Raises:
            AIServiceError: On API errors, blocked replies or an empty reply
        """
        self._ensure_configured()
        try:
            response = await genai.GenerativeModel(model).generate_content_async(parts)
            text = response.text
        except google_exceptions.GoogleAPIError as exc:
            logger.warning("Gemini call to %s failed: %s", model, exc)
            raise AIServiceError(f"Gemini request failed: {exc}") from exc
        except ValueError as exc:
            # response.text raises ValueError when the candidate was blocked
            logger.warning("Gemini reply from %s had no text: %s", model, exc)
            raise AIServiceError("Gemini returned no text") from exc

        if not text or not text.strip():
            raise AIServiceError("Gemini returned an empty reply")
        return text


@lru_cache(maxsize=1)
def get_ai_client() -> GeminiClient:
    """FastAPI dependency returning the process-wide Gemini client."""
    return GeminiClient(api_key=settings.gemini_api_key)
