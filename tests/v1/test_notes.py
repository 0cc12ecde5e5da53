# tests/v1/test_notes.py
"""Tests for study-note image analysis."""

import base64
import json

from fastapi import status
from fastapi.testclient import TestClient

from study_sns.services.ai import AIServiceError

IMAGE_B64 = base64.b64encode(b"fake-image-bytes").decode()


def _note_reply(**fields) -> str:
    base = {
        "title": "광합성",
        "content": "## 명반응\n- 엽록체",
        "summary": "광합성 요약",
        "hashtags": ["#생물", "광합성"],
        "subject": "생물",
        "confidence": 0.92,
    }
    base.update(fields)
    return json.dumps(base, ensure_ascii=False)


def _analyze(client: TestClient, headers, **overrides):
    payload = {"image": IMAGE_B64, "mime_type": "image/png"}
    payload.update(overrides)
    return client.post("/api/v1/notes/analyze", json=payload, headers=headers)


def test_analyze_returns_normalised_note(client: TestClient, fake_ai, auth_token) -> None:
    fake_ai.queue(_note_reply())

    response = _analyze(client, auth_token)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert data["refined"] is False
    assert data["data"]["hashtags"] == ["생물", "광합성"]
    model, parts = fake_ai.calls[0]
    assert model == "gemini-2.5-pro"
    assert parts[1] == {"mime_type": "image/png", "data": b"fake-image-bytes"}


def test_low_confidence_triggers_refine(client: TestClient, fake_ai, auth_token) -> None:
    fake_ai.queue(_note_reply(confidence=0.3), _note_reply(content="## 명반응 (수정)", confidence=0.8))

    data = _analyze(client, auth_token).json()

    assert data["refined"] is True
    assert data["data"]["content"] == "## 명반응 (수정)"
    assert fake_ai.calls[1][0] == "gemini-2.5-flash"


def test_refine_failure_keeps_first_pass(client: TestClient, fake_ai, auth_token) -> None:
    fake_ai.queue(_note_reply(confidence=0.3), AIServiceError("timeout"))

    response = _analyze(client, auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["refined"] is False
    assert response.json()["data"]["confidence"] == 0.3


def test_not_a_note_returns_null_data(client: TestClient, fake_ai, auth_token) -> None:
    fake_ai.queue(_note_reply(title="", content="", confidence=0))

    data = _analyze(client, auth_token).json()

    assert data["success"] is True
    assert data["data"] is None


def test_invalid_mime_type(client: TestClient, fake_ai, auth_token) -> None:
    response = _analyze(client, auth_token, mime_type="application/pdf")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["code"] == "INVALID_IMAGE"
    assert fake_ai.calls == []


def test_empty_image(client: TestClient, fake_ai, auth_token) -> None:
    response = _analyze(client, auth_token, image="")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["code"] == "INVALID_IMAGE"
    assert fake_ai.calls == []


def test_oversized_image(client: TestClient, fake_ai, auth_token) -> None:
    response = _analyze(client, auth_token, image="A" * (14 * 1024 * 1024))

    assert response.status_code == 413
    assert response.json()["detail"]["code"] == "IMAGE_TOO_LARGE"


def test_unparseable_reply(client: TestClient, fake_ai, auth_token) -> None:
    fake_ai.queue("Sorry, I can't help with that.")

    response = _analyze(client, auth_token)

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.json()["detail"]["code"] == "PARSE_ERROR"


def test_ai_failure(client: TestClient, fake_ai, auth_token) -> None:
    fake_ai.queue(AIServiceError("Gemini request failed"))

    response = _analyze(client, auth_token)

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.json()["detail"]["code"] == "SERVER_ERROR"


def test_requires_auth(client: TestClient, fake_ai) -> None:
    response = client.post(
        "/api/v1/notes/analyze", json={"image": IMAGE_B64, "mime_type": "image/png"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
