# mypy: ignore-errors
# tests/v1/test_likes.py
"""Tests for the like toggle endpoint."""

from fastapi import status
from sqlalchemy import func, select

from hobbylink.models import Like
from hobbylink.services.invalidation import INVALIDATION_HEADER


def _like_rows(db_session, post_id: int) -> int:
    return db_session.execute(
        select(func.count()).select_from(Like).where(Like.post_id == post_id)
    ).scalar_one()


def test_like_post_once(client, community, test_post, auth_token, db_session) -> None:
    response = client.post(f"/api/v1/posts/{test_post.id}/like", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "liked": True}
    assert response.headers[INVALIDATION_HEADER] == (
        f"/community/{community.id},/community/{community.id}/post/{test_post.id}"
    )
    assert _like_rows(db_session, test_post.id) == 1


def test_like_post_twice_removes_like(client, test_post, auth_token, db_session) -> None:
    first = client.post(f"/api/v1/posts/{test_post.id}/like", headers=auth_token)
    second = client.post(f"/api/v1/posts/{test_post.id}/like", headers=auth_token)

    assert first.json()["liked"] is True
    assert second.json()["liked"] is False
    assert _like_rows(db_session, test_post.id) == 0


def test_likes_from_different_users_are_counted(
    client, community, test_post, auth_token, other_auth_token
) -> None:
    client.post(f"/api/v1/posts/{test_post.id}/like", headers=auth_token)
    client.post(f"/api/v1/posts/{test_post.id}/like", headers=other_auth_token)

    feed = client.get(f"/api/v1/communities/{community.id}/posts").json()
    assert feed[0]["like_count"] == 2


def test_like_nonexistent_post(client, auth_token) -> None:
    response = client.post("/api/v1/posts/99999/like", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_like_requires_auth(client, test_post) -> None:
    response = client.post(f"/api/v1/posts/{test_post.id}/like")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
