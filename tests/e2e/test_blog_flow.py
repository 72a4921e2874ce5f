"""End-to-end tests for posts, profiles and follows."""

from uuid import uuid4

import pytest

from quill.domain.error import StorageError
from quill.domain.repository import UserRepository
from tests.e2e.api import login, register

CONTENT = "Posted through the API with enough words to be valid."


class TestPosts:
    """Post creation and reading."""

    def test_create_and_read_post(self, client):
        # Arrange
        register(client, "@alice")
        login(client, "@alice")

        # Act
        created = client.post("/posts", json={"title": "Hello", "content": CONTENT})
        post_id = created.json()["post_id"]
        fetched = client.get(f"/posts/{post_id}")
        feed = client.get("/posts")

        # Assert
        assert created.status_code == 201
        assert fetched.status_code == 200
        assert fetched.json()["author_handle"] == "@alice"
        assert [p["post_id"] for p in feed.json()["posts"]] == [post_id]

    def test_anonymous_cannot_post(self, client):
        response = client.post("/posts", json={"title": "Hello", "content": CONTENT})

        assert response.status_code == 401

    def test_bad_and_unknown_post_ids(self, client):
        assert client.get("/posts/not-a-uuid").status_code == 400
        assert client.get(f"/posts/{uuid4()}").status_code == 404

    def test_invalid_post_fields(self, client):
        register(client, "@alice")
        login(client, "@alice")

        response = client.post("/posts", json={"title": "Hi", "content": CONTENT})

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "body", [{"title": 7, "content": CONTENT}, {"title": "Hello", "content": ["x"]}]
    )
    def test_non_string_post_fields_are_bad_request(self, client, body):
        register(client, "@alice")
        login(client, "@alice")

        response = client.post("/posts", json=body)

        assert response.status_code == 400


class TestProfilesAndFollows:
    """Public profiles and the follow graph."""

    def test_follow_and_unfollow(self, client):
        # Arrange
        register(client, "@bob_b")
        register(client, "@alice")
        login(client, "@alice")

        # Act
        followed = client.post("/users/bob_b/follow")
        profile = client.get("/users/@bob_b")
        unfollowed = client.delete("/users/bob_b/follow")

        # Assert
        assert followed.status_code == 200
        assert followed.json() == {"follower_count": 1, "following": True}
        assert profile.json()["is_following"] is True
        assert profile.json()["follower_count"] == 1
        assert unfollowed.json() == {"follower_count": 0, "following": False}

    def test_self_follow_is_bad_request(self, client):
        register(client, "@alice")
        login(client, "@alice")

        response = client.post("/users/alice/follow")

        assert response.status_code == 400

    @pytest.mark.parametrize("method", ["POST", "DELETE"])
    def test_storage_failure_while_resolving_session_is_json_500(
        self, client, container, monkeypatch, method
    ):
        # Arrange
        register(client, "@bob_b")
        register(client, "@alice")
        login(client, "@alice")
        user_repo = client.portal.call(container.get, UserRepository)

        async def fail(*args, **kwargs):
            raise StorageError("db down")

        monkeypatch.setattr(user_repo, "find_by_email", fail)

        # Act
        response = client.request(method, "/users/bob_b/follow")

        # Assert
        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"detail": "Internal server error"}

    def test_follow_requires_session(self, client):
        register(client, "@bob_b")

        assert client.post("/users/bob_b/follow").status_code == 401

    def test_unknown_profile_is_not_found(self, client):
        assert client.get("/users/ghost").status_code == 404

    def test_check_handle(self, client):
        register(client, "@alice")

        taken = client.get("/profile/check-handle", params={"handle": "@Alice"})
        free = client.get("/profile/check-handle", params={"handle": "@fresh"})

        assert taken.json() == {"available": False}
        assert free.json() == {"available": True}
