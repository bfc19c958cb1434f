"""Post actions: create, read, edit, delete and the like toggle."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from hobbylink.db.session import atomic
from hobbylink.models import Comment, Like, MemberRole, Post
from hobbylink.services.community_service import get_community_or_404, get_membership
from hobbylink.services.errors import ForbiddenError, InvalidInputError, NotFoundError
from hobbylink.services.identity import CallerIdentity, IdentityProviderClient
from hobbylink.services.invalidation import ViewInvalidator, community_path, post_path
from hobbylink.services.provisioning import ensure_user, require_caller, resolve_profile

__all__ = [
    "create_post",
    "get_posts",
    "get_post_by_id",
    "edit_post",
    "delete_post",
    "like_post",
    "get_post_or_404",
]

logger = logging.getLogger(__name__)


def _require_text(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InvalidInputError(f"{field} must not be empty")
    return value


def _clean_tags(tags: Sequence[str] | None) -> list[str]:
    return [tag.strip() for tag in tags or [] if tag and tag.strip()]


def get_post_or_404(db: Session, post_id: int) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def _remove_like(db: Session, user_id: int, post_id: int) -> bool:
    result = db.execute(
        delete(Like).where(Like.user_id == user_id, Like.post_id == post_id)
    )
    return result.rowcount > 0


def _toggle_like(db: Session, user_id: int, post_id: int) -> bool:
    """Flip the like state for (user, post) and return True if it is now liked.

    The removal is a conditional delete keyed on the composite primary key.
    If nothing was removed the like is inserted in a savepoint; when a
    concurrent toggle inserted the same row first, this toggle removes it
    again so two toggles always net to "not liked". A failed insert for a
    post that no longer exists is reported as ``NotFoundError``.
    """
    if _remove_like(db, user_id, post_id):
        return False
    try:
        with db.begin_nested():
            db.add(Like(user_id=user_id, post_id=post_id))
    except IntegrityError as exc:
        if db.execute(select(Post.id).where(Post.id == post_id)).first() is None:
            raise NotFoundError("Post not found") from exc
        _remove_like(db, user_id, post_id)
        return False
    return True


async def create_post(
    db: Session,
    caller: CallerIdentity | None,
    *,
    title: str,
    content: str,
    community_id: int,
    tags: Sequence[str] | None = None,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> Post:
    """Publish a post in a community the caller belongs to.

    Args:
        db: Database session
        caller: Resolved caller identity
        title: Post title
        content: Post body
        community_id: Target community
        tags: Optional tag list, empty by default
        identity: Identity provider client for lazy user provisioning
        invalidator: Collector for the views this action makes stale

    Returns:
        The persisted post

    Raises:
        UnauthorizedError: If there is no caller
        NotFoundError: If the community does not exist
        ForbiddenError: If the caller is not a member of the community
    """
    require_caller(caller)
    title = _require_text(title, "Title")
    content = _require_text(content, "Content")

    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        community = get_community_or_404(db, community_id)
        if get_membership(db, user.id, community.id) is None:
            raise ForbiddenError("You must be a member of the community to create posts")

        post = Post(
            title=title,
            content=content,
            tags=_clean_tags(tags),
            published=True,
            author_id=user.id,
            community_id=community.id,
        )
        db.add(post)

    logger.info("User %s created post %s in community %s", user.id, post.id, community_id)
    if invalidator is not None:
        invalidator.revalidate(community_path(community_id))
    return post


def get_posts(db: Session, community_id: int) -> Sequence[Post]:
    """Return a community's published posts, newest first, with their authors."""
    return db.execute(
        select(Post)
        .where(Post.community_id == community_id, Post.published.is_(True))
        .options(selectinload(Post.author))
        .order_by(Post.created_at.desc(), Post.id.desc())
    ).scalars().all()


def get_post_by_id(db: Session, post_id: int) -> Post | None:
    """Return a post with author, likes and comments (newest first), or None."""
    return db.execute(
        select(Post)
        .where(Post.id == post_id)
        .options(
            selectinload(Post.author),
            selectinload(Post.likes),
            selectinload(Post.comments).selectinload(Comment.author),
        )
    ).scalars().first()


async def edit_post(
    db: Session,
    caller: CallerIdentity | None,
    post_id: int,
    *,
    title: str,
    content: str,
    tags: Sequence[str] | None = None,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> Post:
    """Update a post. Only its author may do so; community admins may not.

    Omitted ``tags`` keep their current value.
    """
    require_caller(caller)
    title = _require_text(title, "Title")
    content = _require_text(content, "Content")

    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        post = get_post_or_404(db, post_id)
        if post.author_id != user.id:
            raise ForbiddenError("You can only edit your own posts")

        post.title = title
        post.content = content
        if tags is not None:
            post.tags = _clean_tags(tags)
        community_id = post.community_id

    logger.info("User %s edited post %s", user.id, post_id)
    if invalidator is not None:
        invalidator.revalidate(community_path(community_id), post_path(community_id, post_id))
    return post


async def delete_post(
    db: Session,
    caller: CallerIdentity | None,
    post_id: int,
    *,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> None:
    """Delete a post together with its likes and comments.

    Permitted for the author and for admins of the post's community.
    """
    require_caller(caller)
    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        post = get_post_or_404(db, post_id)
        community_id = post.community_id

        membership = get_membership(db, user.id, community_id)
        is_author = post.author_id == user.id
        is_admin = membership is not None and membership.role == MemberRole.ADMIN
        if not is_author and not is_admin:
            raise ForbiddenError("You don't have permission to delete this post")

        # Dependents first, then the post itself.
        db.execute(delete(Like).where(Like.post_id == post_id))
        db.execute(delete(Comment).where(Comment.post_id == post_id))
        db.execute(delete(Post).where(Post.id == post_id))

    logger.info("User %s deleted post %s from community %s", user.id, post_id, community_id)
    if invalidator is not None:
        invalidator.revalidate(community_path(community_id), post_path(community_id, post_id))


async def like_post(
    db: Session,
    caller: CallerIdentity | None,
    post_id: int,
    *,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> bool:
    """Toggle the caller's like on a post and return the new state."""
    require_caller(caller)
    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        post = get_post_or_404(db, post_id)
        community_id = post.community_id
        liked = _toggle_like(db, user.id, post.id)

    logger.info("User %s %s post %s", user.id, "liked" if liked else "unliked", post_id)
    if invalidator is not None:
        invalidator.revalidate(community_path(community_id), post_path(community_id, post_id))
    return liked
