# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

from study_sns.core.security import create_access_token, hash_password
from study_sns.db.session import Base
from study_sns.db.session import get_db as app_get_session
from study_sns.main import app as fastapi_app
from study_sns.models import Post, Profile, User
from study_sns.services.ai import get_ai_client
from study_sns.services.storage import StorageError, get_image_storage

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"


class FakeAIClient:
    """Stand-in for GeminiClient that replays queued replies."""

    def __init__(self) -> None:
        self.replies: list[str | Exception] = []
        self.calls: list[tuple[str, list[Any]]] = []

    def queue(self, *replies: str | Exception) -> None:
        self.replies.extend(replies)

    async def generate(self, model: str, parts: list[Any]) -> str:
        self.calls.append((model, parts))
        if not self.replies:
            raise AssertionError("FakeAIClient received an unexpected call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeImageStorage:
    """Stand-in for S3ImageStorage that keeps objects in memory."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail = False

    def upload_image(self, user_id: str, data: bytes, content_type: str) -> tuple[str, str]:
        if self.fail:
            raise StorageError("bucket unavailable")
        key = f"post-images/{user_id}/{len(self.objects) + 1}.png"
        self.objects[key] = (data, content_type)
        return f"https://cdn.test/{key}", key


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def fake_ai(app: FastAPI) -> Iterator[FakeAIClient]:
    """Route every Gemini call to an in-memory fake."""
    fake = FakeAIClient()
    app.dependency_overrides[get_ai_client] = lambda: fake
    try:
        yield fake
    finally:
        app.dependency_overrides.pop(get_ai_client, None)


@pytest.fixture()
def fake_storage(app: FastAPI) -> Iterator[FakeImageStorage]:
    """Route image uploads to an in-memory fake bucket."""
    fake = FakeImageStorage()
    app.dependency_overrides[get_image_storage] = lambda: fake
    try:
        yield fake
    finally:
        app.dependency_overrides.pop(get_image_storage, None)


def make_user(
    db_session: Session,
    *,
    email: str,
    username: str,
    school_name: str | None = "Test University",
    major: str | None = "Computer Science",
    is_notify_comment: bool = True,
) -> User:
    """Persist a user with a profile and return it."""
    user = User(email=email, password_hash=hash_password(TEST_PASSWORD))
    user.profile = Profile(
        username=username,
        school_name=school_name,
        major=major,
        is_notify_comment=is_notify_comment,
    )
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


def make_post(db_session: Session, author: User, **overrides: Any) -> Post:
    """Persist a post authored by ``author``."""
    fields: dict[str, Any] = {
        "title": "Linear algebra notes",
        "content": "Eigenvalues and eigenvectors",
        "board": "study",
        "tag": "math",
    }
    fields.update(overrides)
    post = Post(user_id=author.id, **fields)
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    return post


def auth_headers_for(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[User]:
    """Create and return a persisted test user."""
    yield make_user(db_session, email="test@example.com", username="tester")


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[User]:
    """Create and return a second persisted user."""
    yield make_user(
        db_session,
        email="other@example.com",
        username="other",
        school_name="Other College",
        major="Physics",
    )


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers_for(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers_for(other_user)


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Iterator[Post]:
    """Create a baseline post for tests."""
    yield make_post(db_session, test_user)


@pytest.fixture()
def user_factory(db_session: Session) -> Any:
    """Return a callable that persists extra users."""

    def _create(email: str, username: str, **kwargs: Any) -> User:
        return make_user(db_session, email=email, username=username, **kwargs)

    return _create


@pytest.fixture()
def post_factory(db_session: Session) -> Any:
    """Return a callable that persists posts for a given author."""

    def _create(author: User, **overrides: Any) -> Post:
        return make_post(db_session, author, **overrides)

    return _create


@pytest.fixture()
def headers_for() -> Any:
    """Return a callable building bearer headers for any user."""
    return auth_headers_for
