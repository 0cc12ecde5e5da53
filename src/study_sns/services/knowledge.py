"""Knowledge card generation from a post."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from study_sns.core.settings import settings
from study_sns.models.post import Post

from .ai import AIResponseParseError, GeminiClient, ContentPart, image_part, parse_json_reply
from .prompts import KNOWLEDGE_CARD_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/jpeg"


async def fetch_image(url: str) -> tuple[bytes, str]:
    """Download an image, returning its bytes and content type.

    Raises:
        httpx.HTTPError: On network errors or non-2xx responses
    """
    async with httpx.AsyncClient(timeout=settings.image_fetch_timeout_seconds) as client:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()
    mime_type = response.headers.get("content-type", DEFAULT_IMAGE_MIME).split(";")[0].strip()
    return response.content, mime_type or DEFAULT_IMAGE_MIME


def _card_fields(data: dict[str, Any]) -> dict[str, Any]:
    title = data.get("title")
    summary = data.get("summary")
    if not isinstance(title, str) or not title.strip():
        raise AIResponseParseError("Knowledge card reply has no title")
    if not isinstance(summary, str) or not summary.strip():
        raise AIResponseParseError("Knowledge card reply has no summary")

    category = data.get("category")
    keywords = data.get("keywords") or []
    if not isinstance(keywords, list):
        keywords = []
    return {
        "title": title.strip(),
        "summary": summary.strip(),
        "category": category.strip() if isinstance(category, str) and category.strip() else None,
        "keywords": [str(k).strip() for k in keywords if str(k).strip()],
    }


async def generate_card_fields(client: GeminiClient, post: Post) -> dict[str, Any]:
    """Ask the card model for title, summary, category and keywords for ``post``.

    The post image is attached when it can be fetched; otherwise the prompt is text only.

    Raises:
        AIServiceError: If the model call fails or the reply is unusable
    """
    prompt = KNOWLEDGE_CARD_PROMPT.format(title=post.title, board=post.board, content=post.content)
    parts: list[ContentPart] = [prompt]

    if post.image_url:
        try:
            data, mime_type = await fetch_image(post.image_url)
            parts.append(image_part(data, mime_type))
        except httpx.HTTPError as exc:
            logger.warning(
                "Image fetch for post %s failed, falling back to text only: %s", post.id, exc
            )

    reply = await client.generate(settings.gemini_card_model, parts)
    return _card_fields(parse_json_reply(reply))
