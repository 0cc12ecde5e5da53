# tests/v1/test_comments.py
"""Tests for comments, accepted answers and comment notifications."""

from fastapi import status
from fastapi.testclient import TestClient

from study_sns.models import Comment, Notification, Post, Profile


def _comment(client: TestClient, headers, post_id: int, content: str = "Try BFS") -> dict:
    response = client.post(
        "/api/v1/comments", json={"post_id": post_id, "content": content}, headers=headers
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


class TestCreateComment:
    def test_comment_notifies_post_author(
        self, client: TestClient, db_session, test_user, test_post: Post, other_auth_token
    ) -> None:
        data = _comment(client, other_auth_token, test_post.id)

        assert data["profiles"]["username"] == "other"
        notification = db_session.query(Notification).filter_by(user_id=test_user.id).one()
        assert notification.type == "comment"
        assert notification.post_id == test_post.id
        assert notification.is_read is False

    def test_own_comment_does_not_notify(
        self, client: TestClient, db_session, test_post: Post, auth_token
    ) -> None:
        _comment(client, auth_token, test_post.id)
        assert db_session.query(Notification).count() == 0

    def test_notification_respects_opt_out(
        self, client: TestClient, db_session, test_user, test_post: Post, other_auth_token
    ) -> None:
        profile = db_session.get(Profile, test_user.id)
        profile.is_notify_comment = False
        db_session.flush()

        _comment(client, other_auth_token, test_post.id)
        assert db_session.query(Notification).count() == 0

    def test_comment_on_missing_post(self, client: TestClient, auth_token) -> None:
        response = client.post(
            "/api/v1/comments", json={"post_id": 9999, "content": "hi"}, headers=auth_token
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_blank_comment_rejected(self, client: TestClient, test_post: Post, auth_token) -> None:
        response = client.post(
            "/api/v1/comments", json={"post_id": test_post.id, "content": "   "}, headers=auth_token
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestListComments:
    def test_accepted_first_then_oldest(
        self, client: TestClient, db_session, test_post: Post, other_auth_token, auth_token
    ) -> None:
        first = _comment(client, other_auth_token, test_post.id, "first")
        second = _comment(client, other_auth_token, test_post.id, "second")
        client.patch(
            f"/api/v1/comments/{second['id']}", json={"action": "adopt"}, headers=auth_token
        )

        response = client.get("/api/v1/comments", params={"post_id": test_post.id})

        assert response.status_code == status.HTTP_200_OK
        assert [c["id"] for c in response.json()] == [second["id"], first["id"]]
        assert response.json()[0]["is_accepted"] is True

    def test_missing_post_id(self, client: TestClient) -> None:
        assert client.get("/api/v1/comments").status_code == status.HTTP_400_BAD_REQUEST


class TestUpdateComment:
    def test_post_author_adopts_answer(
        self, client: TestClient, db_session, test_post: Post, other_user, auth_token, other_auth_token
    ) -> None:
        comment = _comment(client, other_auth_token, test_post.id)

        response = client.patch(
            f"/api/v1/comments/{comment['id']}", json={"action": "adopt"}, headers=auth_token
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_accepted"] is True
        assert db_session.get(Post, test_post.id).is_solved is True
        adopted = db_session.query(Notification).filter_by(user_id=other_user.id).one()
        assert adopted.type == "adopted"

    def test_commenter_cannot_adopt(
        self, client: TestClient, test_post: Post, other_auth_token
    ) -> None:
        comment = _comment(client, other_auth_token, test_post.id)
        response = client.patch(
            f"/api/v1/comments/{comment['id']}", json={"action": "adopt"}, headers=other_auth_token
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_author_edits_content(
        self, client: TestClient, test_post: Post, other_auth_token
    ) -> None:
        comment = _comment(client, other_auth_token, test_post.id)
        response = client.patch(
            f"/api/v1/comments/{comment['id']}", json={"content": "edited"}, headers=other_auth_token
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["content"] == "edited"

    def test_post_author_cannot_edit_others_comment(
        self, client: TestClient, test_post: Post, auth_token, other_auth_token
    ) -> None:
        comment = _comment(client, other_auth_token, test_post.id)
        response = client.patch(
            f"/api/v1/comments/{comment['id']}", json={"content": "rewritten"}, headers=auth_token
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_missing_comment(self, client: TestClient, auth_token) -> None:
        response = client.patch("/api/v1/comments/9999", json={"content": "x"}, headers=auth_token)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteComment:
    def test_author_deletes(
        self, client: TestClient, db_session, test_post: Post, other_auth_token
    ) -> None:
        comment = _comment(client, other_auth_token, test_post.id)
        response = client.delete(f"/api/v1/comments/{comment['id']}", headers=other_auth_token)
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert db_session.get(Comment, comment["id"]) is None

    def test_other_user_cannot_delete(
        self, client: TestClient, test_post: Post, auth_token, other_auth_token
    ) -> None:
        comment = _comment(client, other_auth_token, test_post.id)
        response = client.delete(f"/api/v1/comments/{comment['id']}", headers=auth_token)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_missing(self, client: TestClient, auth_token) -> None:
        assert (
            client.delete("/api/v1/comments/9999", headers=auth_token).status_code
            == status.HTTP_404_NOT_FOUND
        )
