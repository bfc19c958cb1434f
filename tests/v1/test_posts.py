# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for post endpoints."""

from fastapi import status
from sqlalchemy import func, select

from hobbylink.models import Comment, Like, Post
from hobbylink.services.invalidation import INVALIDATION_HEADER


def test_create_post(client, community, test_user, auth_token) -> None:
    response = client.post(
        f"/api/v1/communities/{community.id}/posts",
        json={"title": "Gym meetup", "content": "Thursday at 7", "tags": ["meetup", " "]},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["title"] == "Gym meetup"
    assert data["tags"] == ["meetup"]
    assert data["published"] is True
    assert data["author_id"] == test_user.id
    assert data["community_id"] == community.id
    assert response.headers[INVALIDATION_HEADER] == f"/community/{community.id}"


def test_create_post_requires_membership(client, community, other_auth_token, db_session) -> None:
    response = client.post(
        f"/api/v1/communities/{community.id}/posts",
        json={"title": "Drive-by", "content": "Not a member"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert db_session.execute(select(func.count(Post.id))).scalar_one() == 0


def test_create_post_unknown_community(client, auth_token) -> None:
    response = client.post(
        "/api/v1/communities/99999/posts",
        json={"title": "Lost", "content": "Nowhere"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_create_post_blank_title(client, community, auth_token) -> None:
    response = client.post(
        f"/api/v1/communities/{community.id}/posts",
        json={"title": "   ", "content": "Body"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == "Title must not be empty"


def test_create_post_requires_auth(client, community) -> None:
    response = client.post(
        f"/api/v1/communities/{community.id}/posts",
        json={"title": "Anon", "content": "Body"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_community_feed_newest_first(client, community, auth_token, test_post) -> None:
    created = client.post(
        f"/api/v1/communities/{community.id}/posts",
        json={"title": "Newer", "content": "Posted second"},
        headers=auth_token,
    )
    assert created.status_code == status.HTTP_201_CREATED

    response = client.get(f"/api/v1/communities/{community.id}/posts")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [p["title"] for p in data] == ["Newer", "First send"]
    assert data[1]["author"]["name"] == "Other User"
    assert data[1]["like_count"] == 0
    assert data[1]["comment_count"] == 0


def test_community_feed_hides_unpublished(client, community, test_post, db_session) -> None:
    test_post.published = False
    db_session.commit()

    response = client.get(f"/api/v1/communities/{community.id}/posts")
    assert response.json() == []


def test_get_post_detail(client, test_post, other_auth_token, auth_token, other_user) -> None:
    client.post(f"/api/v1/posts/{test_post.id}/like", headers=other_auth_token)
    client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Nice send!"},
        headers=auth_token,
    )
    client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Beta please"},
        headers=other_auth_token,
    )

    response = client.get(f"/api/v1/posts/{test_post.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["author"]["id"] == other_user.id
    assert data["like_count"] == 1
    assert data["comment_count"] == 2
    assert data["liked_by"] == [other_user.id]
    assert [c["content"] for c in data["comments"]] == ["Beta please", "Nice send!"]
    assert data["comments"][0]["author"]["id"] == other_user.id


def test_get_nonexistent_post(client) -> None:
    response = client.get("/api/v1/posts/99999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Post not found"


def test_edit_post_by_author(client, community, test_post, other_auth_token) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"title": "First send (V5?)", "content": "Maybe it was a V5"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "First send (V5?)"
    assert data["tags"] == ["v4"]
    assert response.headers[INVALIDATION_HEADER] == (
        f"/community/{community.id},/community/{community.id}/post/{test_post.id}"
    )


def test_edit_post_replaces_tags(client, test_post, other_auth_token) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"title": "First send", "content": "Same", "tags": ["v5", "crimps"]},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["tags"] == ["v5", "crimps"]


def test_edit_post_by_admin_is_forbidden(client, test_post, auth_token, db_session) -> None:
    """Community admins cannot edit other members' posts."""
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"title": "Moderated", "content": "Rewritten"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN

    db_session.expire_all()
    assert db_session.get(Post, test_post.id).title == "First send"


def test_edit_nonexistent_post(client, auth_token) -> None:
    response = client.put(
        "/api/v1/posts/99999",
        json={"title": "Nope", "content": "Nope"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_post_by_author(client, community, test_post, other_auth_token, db_session) -> None:
    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=other_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}
    assert response.headers[INVALIDATION_HEADER] == (
        f"/community/{community.id},/community/{community.id}/post/{test_post.id}"
    )
    assert db_session.get(Post, test_post.id) is None


def test_delete_post_by_admin_removes_comments_and_likes(
    client, test_post, auth_token, other_auth_token, db_session
) -> None:
    """Admins may delete any post; its comments and likes go with it."""
    post_id = test_post.id
    client.post(f"/api/v1/posts/{post_id}/like", headers=auth_token)
    client.post(f"/api/v1/posts/{post_id}/like", headers=other_auth_token)
    client.post(f"/api/v1/posts/{post_id}/comments", json={"content": "one"}, headers=auth_token)
    client.post(f"/api/v1/posts/{post_id}/comments", json={"content": "two"}, headers=other_auth_token)

    response = client.delete(f"/api/v1/posts/{post_id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK

    assert db_session.get(Post, post_id) is None
    assert db_session.execute(
        select(func.count()).select_from(Like).where(Like.post_id == post_id)
    ).scalar_one() == 0
    assert db_session.execute(
        select(func.count(Comment.id)).where(Comment.post_id == post_id)
    ).scalar_one() == 0


def test_delete_post_by_plain_member_is_forbidden(
    client, community, test_post, headers_for, db_session
) -> None:
    outsider = headers_for("user_third")
    assert client.post(f"/api/v1/communities/{community.id}/join", headers=outsider).status_code == 201

    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=outsider)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert db_session.get(Post, test_post.id) is not None


def test_delete_nonexistent_post(client, auth_token) -> None:
    response = client.delete("/api/v1/posts/99999", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
