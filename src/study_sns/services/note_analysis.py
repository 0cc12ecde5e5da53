"""Study-note extraction: one vision pass, plus a text correction pass when unsure."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from study_sns.core.settings import settings

from .ai import AIServiceError, GeminiClient, image_part, parse_json_reply
from .prompts import NOTE_ANALYSIS_PROMPT, NOTE_REFINE_PROMPT

logger = logging.getLogger(__name__)

MAX_HASHTAGS = 10
DEFAULT_SUBJECT = "기타"
DEFAULT_CONFIDENCE = 0.5


@dataclass
class NoteResult:
    note: dict[str, Any] | None
    refined: bool = False


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    return min(1.0, max(0.0, float(value)))


def normalize_note(data: dict[str, Any]) -> dict[str, Any] | None:
    """Trim and bound a raw model reply. Returns None without a title and content."""
    title = _text(data.get("title"))
    content = _text(data.get("content"))
    if not title or not content:
        return None

    raw_tags = data.get("hashtags") or []
    hashtags = []
    if isinstance(raw_tags, list):
        for tag in raw_tags:
            cleaned = _text(tag).lstrip("#").strip()
            if cleaned:
                hashtags.append(cleaned)

    return {
        "title": title,
        "content": content,
        "summary": _text(data.get("summary")),
        "hashtags": hashtags[:MAX_HASHTAGS],
        "subject": _text(data.get("subject")) or DEFAULT_SUBJECT,
        "confidence": _confidence(data.get("confidence")),
    }


async def refine_note(client: GeminiClient, note: dict[str, Any]) -> dict[str, Any] | None:
    """Ask the text model to correct recognition errors. None if the pass fails."""
    prompt = NOTE_REFINE_PROMPT.format(
        title=note["title"], subject=note["subject"], content=note["content"]
    )
    try:
        reply = await client.generate(settings.gemini_refine_model, [prompt])
        refined = normalize_note(parse_json_reply(reply))
    except AIServiceError as exc:
        logger.warning("Note refine pass failed, keeping first pass: %s", exc)
        return None
    if refined is None:
        logger.info("Note refine pass returned no note, keeping first pass")
    return refined


async def analyze_note(client: GeminiClient, image: bytes, mime_type: str) -> NoteResult:
    """Run the vision pass and, below the confidence threshold, the refine pass.

    Raises:
        AIServiceError: If the vision call fails
        AIResponseParseError: If the vision reply is not JSON
    """
    reply = await client.generate(
        settings.gemini_vision_model, [NOTE_ANALYSIS_PROMPT, image_part(image, mime_type)]
    )
    note = normalize_note(parse_json_reply(reply))
    if note is None:
        return NoteResult(note=None)

    if note["confidence"] < settings.note_refine_threshold:
        refined = await refine_note(client, note)
        if refined is not None:
            return NoteResult(note=refined, refined=True)
    return NoteResult(note=note)
