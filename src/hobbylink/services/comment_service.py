"""Comment actions."""
from __future__ import annotations

import logging

from sqlalchemy import delete
from sqlalchemy.orm import Session

from hobbylink.db.session import atomic
from hobbylink.models import Comment, MemberRole
from hobbylink.services.community_service import get_membership
from hobbylink.services.errors import ForbiddenError, InvalidInputError, NotFoundError
from hobbylink.services.identity import CallerIdentity, IdentityProviderClient
from hobbylink.services.invalidation import ViewInvalidator, community_path, post_path
from hobbylink.services.post_service import get_post_or_404
from hobbylink.services.provisioning import ensure_user, require_caller, resolve_profile

__all__ = ["create_comment", "edit_comment", "delete_comment"]

logger = logging.getLogger(__name__)


def _clean_content(content: str) -> str:
    content = (content or "").strip()
    if not content:
        raise InvalidInputError("Comment must not be empty")
    return content


def _get_comment_or_404(db: Session, comment_id: int) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def _revalidate(invalidator: ViewInvalidator | None, community_id: int, post_id: int) -> None:
    if invalidator is not None:
        invalidator.revalidate(community_path(community_id), post_path(community_id, post_id))


async def create_comment(
    db: Session,
    caller: CallerIdentity | None,
    post_id: int,
    content: str,
    *,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> Comment:
    """Comment on a post. The caller must belong to the post's community.

    Raises:
        UnauthorizedError: If there is no caller
        NotFoundError: If the post does not exist
        ForbiddenError: If the caller is not a member of the post's community
    """
    require_caller(caller)
    content = _clean_content(content)

    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        post = get_post_or_404(db, post_id)
        community_id = post.community_id
        if get_membership(db, user.id, community_id) is None:
            raise ForbiddenError("You must be a member of the community to comment")

        comment = Comment(content=content, author_id=user.id, post_id=post.id)
        db.add(comment)

    logger.info("User %s commented on post %s", user.id, post_id)
    _revalidate(invalidator, community_id, post_id)
    return comment


async def edit_comment(
    db: Session,
    caller: CallerIdentity | None,
    comment_id: int,
    content: str,
    *,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> Comment:
    """Update a comment's content. Only its author may do so."""
    require_caller(caller)
    content = _clean_content(content)

    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        comment = _get_comment_or_404(db, comment_id)
        if comment.author_id != user.id:
            raise ForbiddenError("You can only edit your own comments")

        comment.content = content
        post_id = comment.post_id
        community_id = comment.post.community_id

    logger.info("User %s edited comment %s", user.id, comment_id)
    _revalidate(invalidator, community_id, post_id)
    return comment


async def delete_comment(
    db: Session,
    caller: CallerIdentity | None,
    comment_id: int,
    *,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> None:
    """Delete a comment. Permitted for its author and for community admins."""
    require_caller(caller)
    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        comment = _get_comment_or_404(db, comment_id)
        post_id = comment.post_id
        community_id = comment.post.community_id

        membership = get_membership(db, user.id, community_id)
        is_author = comment.author_id == user.id
        is_admin = membership is not None and membership.role == MemberRole.ADMIN
        if not is_author and not is_admin:
            raise ForbiddenError("You don't have permission to delete this comment")

        db.execute(delete(Comment).where(Comment.id == comment_id))

    logger.info("User %s deleted comment %s", user.id, comment_id)
    _revalidate(invalidator, community_id, post_id)
