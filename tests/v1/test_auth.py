# tests/v1/test_auth.py
"""Tests for registration, login and bearer-token handling."""

from datetime import timedelta

from fastapi import status
from fastapi.testclient import TestClient

from study_sns.core.security import create_access_token, hash_password, verify_password
from study_sns.models import User


def _register(client: TestClient, **overrides):
    payload = {
        "email": "new@example.com",
        "password": "supersecret1",
        "username": "newbie",
        "school_name": "Seoul Univ",
        "major": "Math",
    }
    payload.update(overrides)
    return client.post("/api/v1/auth/register", json=payload)


class TestRegister:
    def test_register_creates_profile(self, client: TestClient, db_session) -> None:
        response = _register(client)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "newbie"
        assert data["is_notify_comment"] is True
        assert data["is_marketing_agreed"] is False

        user = db_session.query(User).filter_by(email="new@example.com").one()
        assert user.profile.school_name == "Seoul Univ"
        assert user.password_hash != "supersecret1"

    def test_duplicate_email_conflicts(self, client: TestClient, test_user: User) -> None:
        response = _register(client, email="test@example.com")
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_email_match_is_case_insensitive(self, client: TestClient, test_user: User) -> None:
        response = _register(client, email="TEST@example.com")
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_duplicate_username_conflicts(self, client: TestClient, test_user: User) -> None:
        response = _register(client, username="tester")
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_short_password_rejected(self, client: TestClient) -> None:
        response = _register(client, password="short")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestLogin:
    def test_login_returns_usable_token(self, client: TestClient, test_user: User) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "test@example.com", "password": "correct-horse-battery"},
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user_id"] == test_user.id

        me = client.get(
            "/api/v1/mypage",
            headers={"Authorization": f"Bearer {data['access_token']}"},
        )
        assert me.status_code == status.HTTP_200_OK

    def test_wrong_password_is_unauthorized(self, client: TestClient, test_user: User) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "test@example.com", "password": "nope-nope-nope"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_email_is_unauthorized(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "ghost@example.com", "password": "whatever123"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestBearerToken:
    def test_missing_token_is_unauthorized(self, client: TestClient) -> None:
        assert client.get("/api/v1/mypage").status_code == status.HTTP_401_UNAUTHORIZED

    def test_garbage_token_is_unauthorized(self, client: TestClient) -> None:
        response = client.get("/api/v1/mypage", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token_is_unauthorized(self, client: TestClient, test_user: User) -> None:
        token = create_access_token(test_user.id, expires_delta=timedelta(seconds=-5))
        response = client.get("/api/v1/mypage", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_for_deleted_user_is_unauthorized(self, client: TestClient) -> None:
        token = create_access_token("00000000-0000-0000-0000-000000000000")
        response = client.get("/api/v1/mypage", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_password_hash_verifies() -> None:
    encoded = hash_password("pw-123456", iterations=1000)
    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("pw-123456", encoded)
    assert not verify_password("pw-654321", encoded)
    assert not verify_password("pw-123456", "garbage")
