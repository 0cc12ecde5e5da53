# tests/v1/test_profiles.py
"""Tests for my page, public profiles and account settings."""

from fastapi import status
from fastapi.testclient import TestClient

from study_sns.models import Comment, Hashtag, Post, Profile, Review, User


class TestMyPage:
    def test_mypage_sums_review_scores(
        self, client: TestClient, db_session, test_user, other_user, post_factory, auth_token
    ) -> None:
        first = post_factory(test_user, title="First")
        second = post_factory(test_user, title="Second")
        db_session.add_all(
            [
                Review(user_id=other_user.id, post_id=first.id, score=4),
                Review(user_id=other_user.id, post_id=second.id, score=5),
            ]
        )
        db_session.flush()

        response = client.get("/api/v1/mypage", headers=auth_token)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["profile"]["username"] == "tester"
        assert data["totalScore"] == 9
        assert data["postCount"] == 2
        assert [post["title"] for post in data["posts"]] == ["Second", "First"]

    def test_update_mypage(self, client: TestClient, db_session, test_user, auth_token) -> None:
        response = client.put(
            "/api/v1/mypage",
            json={"username": "renamed", "major": "Statistics"},
            headers=auth_token,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["username"] == "renamed"
        assert data["major"] == "Statistics"
        assert data["school_name"] == "Test University"
        assert data["updated_at"] is not None

    def test_update_mypage_username_taken(
        self, client: TestClient, test_user, other_user, auth_token
    ) -> None:
        response = client.put("/api/v1/mypage", json={"username": "other"}, headers=auth_token)
        assert response.status_code == status.HTTP_409_CONFLICT


class TestPublicProfile:
    def test_profile_of_other_user(self, client: TestClient, other_user, post_factory) -> None:
        post_factory(other_user)
        response = client.get(f"/api/v1/profiles/{other_user.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["profile"]["major"] == "Physics"
        assert data["postCount"] == 1
        assert data["totalScore"] == 0

    def test_unknown_profile(self, client: TestClient) -> None:
        response = client.get("/api/v1/profiles/does-not-exist")
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSettings:
    def test_toggle_preferences(self, client: TestClient, test_user, auth_token) -> None:
        response = client.put(
            "/api/v1/settings",
            json={"is_notify_comment": False, "is_marketing_agreed": True},
            headers=auth_token,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["is_notify_comment"] is False
        assert data["is_marketing_agreed"] is True

    def test_delete_account_removes_owned_rows(
        self, client: TestClient, db_session, test_user, other_user, post_factory, auth_token
    ) -> None:
        own_post = post_factory(test_user)
        other_post = post_factory(other_user)
        client.post(
            "/api/v1/posts",
            json={"title": "Tagged", "content": "x", "board": "free", "hashtags": ["gone"]},
            headers=auth_token,
        )
        db_session.add_all(
            [
                Comment(post_id=other_post.id, user_id=test_user.id, content="hi"),
                Review(user_id=test_user.id, post_id=other_post.id, score=2),
                Review(user_id=other_user.id, post_id=own_post.id, score=5),
            ]
        )
        db_session.flush()
        user_id = test_user.id

        response = client.delete("/api/v1/settings", headers=auth_token)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert db_session.get(User, user_id) is None
        assert db_session.get(Profile, user_id) is None
        assert db_session.query(Post).filter_by(user_id=user_id).count() == 0
        assert db_session.query(Comment).filter_by(user_id=user_id).count() == 0
        assert db_session.query(Review).count() == 0
        assert db_session.query(Hashtag).filter_by(name="gone").one().count == 0
        assert db_session.get(Post, other_post.id) is not None
