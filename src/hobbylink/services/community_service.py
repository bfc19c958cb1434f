"""Community actions: creation, joining and community reads."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from hobbylink.core.settings import settings
from hobbylink.db.session import atomic
from hobbylink.models import Community, Hobby, Member, MemberRole
from hobbylink.services.errors import ConflictError, InvalidInputError, NotFoundError
from hobbylink.services.identity import CallerIdentity, IdentityProviderClient
from hobbylink.services.invalidation import (
    ViewInvalidator,
    community_list_path,
    community_path,
    hobby_path,
)
from hobbylink.services.provisioning import (
    ensure_default_hobby,
    ensure_user,
    get_user_by_subject,
    require_caller,
    resolve_profile,
)

__all__ = [
    "create_community",
    "join_community",
    "list_communities",
    "get_community",
    "get_communities_by_hobby",
    "get_community_or_404",
    "get_membership",
    "is_member",
]

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 500
SORT_OPTIONS = ("newest", "oldest", "most_members")


def _clean_community_input(name: str, description: str | None) -> tuple[str, str | None]:
    name = (name or "").strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise InvalidInputError(
            f"Community name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    if description is not None:
        description = description.strip() or None
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise InvalidInputError(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )
    return name, description


def _resolve_hobby(db: Session, hobby_id: int | None) -> Hobby:
    if hobby_id is None:
        return ensure_default_hobby(db)
    hobby = db.get(Hobby, hobby_id)
    if hobby is None:
        raise NotFoundError("Hobby not found")
    return hobby


def get_community_or_404(db: Session, community_id: int) -> Community:
    community = db.get(Community, community_id)
    if community is None:
        raise NotFoundError("Community not found")
    return community


def get_membership(db: Session, user_id: int, community_id: int) -> Member | None:
    """Return the member row binding a user to a community, if any."""
    return db.execute(
        select(Member).where(
            Member.user_id == user_id,
            Member.community_id == community_id,
        )
    ).scalars().first()


async def create_community(
    db: Session,
    caller: CallerIdentity | None,
    *,
    name: str,
    description: str | None = None,
    hobby_id: int | None = None,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> Community:
    """Create a community and make its creator the first ADMIN member.

    Args:
        db: Database session
        caller: Resolved caller identity
        name: Display name, 3 to 50 characters
        description: Optional description, at most 500 characters
        hobby_id: Hobby the community belongs to; when omitted the default
            hobby is used if the deployment allows it
        identity: Identity provider client for lazy user provisioning
        invalidator: Collector for the views this action makes stale

    Returns:
        The persisted community

    Raises:
        UnauthorizedError: If there is no caller
        InvalidInputError: If name/description are out of bounds or a hobby is required
        NotFoundError: If ``hobby_id`` does not reference an existing hobby
    """
    require_caller(caller)
    name, description = _clean_community_input(name, description)
    if hobby_id is None and not settings.allow_default_hobby:
        raise InvalidInputError("A hobby is required")

    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        hobby = _resolve_hobby(db, hobby_id)
        community = Community(
            name=name,
            description=description,
            hobby=hobby,
            creator=user,
        )
        community.users.append(user)
        community.members.append(Member(user=user, role=MemberRole.ADMIN))
        db.add(community)

    logger.info("User %s created community %s (%r)", user.id, community.id, name)
    if invalidator is not None:
        invalidator.revalidate(community_list_path(), hobby_path(community.hobby_id))
    return community


async def join_community(
    db: Session,
    caller: CallerIdentity | None,
    community_id: int,
    *,
    identity: IdentityProviderClient,
    invalidator: ViewInvalidator | None = None,
) -> None:
    """Add the caller to a community as a regular member.

    Raises:
        UnauthorizedError: If there is no caller
        NotFoundError: If the community does not exist
        ConflictError: If the caller is already a member
    """
    require_caller(caller)
    profile = await resolve_profile(db, caller, identity)
    with atomic(db):
        user = ensure_user(db, caller, profile)
        community = get_community_or_404(db, community_id)

        if get_membership(db, user.id, community.id) is not None:
            raise ConflictError("Already a member of this community")

        try:
            with db.begin_nested():
                db.add(Member(user_id=user.id, community_id=community.id, role=MemberRole.MEMBER))
        except IntegrityError as exc:
            raise ConflictError("Already a member of this community") from exc

        if user not in community.users:
            community.users.append(user)
        hobby_id = community.hobby_id

    logger.info("User %s joined community %s", user.id, community_id)
    if invalidator is not None:
        invalidator.revalidate(community_path(community_id), hobby_path(hobby_id))


def list_communities(
    db: Session,
    *,
    caller: CallerIdentity | None = None,
    search: str | None = None,
    hobby_ids: Sequence[int] | None = None,
    only_mine: bool = False,
    sort: str = "newest",
    limit: int | None = None,
) -> Sequence[Community]:
    """List communities with optional search, hobby and membership filters.

    Args:
        db: Database session
        caller: Resolved caller identity; required when ``only_mine`` is set
        search: Case-insensitive substring matched against name or description
        hobby_ids: Restrict results to these hobbies
        only_mine: Restrict results to communities the caller belongs to
        sort: One of ``newest``, ``oldest`` or ``most_members``
        limit: Maximum number of rows (defaults to the configured page size)

    Returns:
        Communities with their hobby loaded
    """
    if sort not in SORT_OPTIONS:
        raise InvalidInputError(f"Unsupported sort option: {sort}")

    stmt = select(Community).options(selectinload(Community.hobby))

    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(Community.name).like(pattern),
                func.lower(func.coalesce(Community.description, "")).like(pattern),
            )
        )

    if hobby_ids:
        stmt = stmt.where(Community.hobby_id.in_(list(hobby_ids)))

    if only_mine:
        subject = require_caller(caller)
        user = get_user_by_subject(db, subject)
        if user is None:
            return []
        stmt = stmt.where(
            Community.id.in_(select(Member.community_id).where(Member.user_id == user.id))
        )

    if sort == "oldest":
        stmt = stmt.order_by(Community.created_at.asc(), Community.id.asc())
    elif sort == "most_members":
        stmt = stmt.order_by(
            Community.member_count.desc(),
            Community.created_at.desc(),
            Community.id.desc(),
        )
    else:
        stmt = stmt.order_by(Community.created_at.desc(), Community.id.desc())

    stmt = stmt.limit(limit or settings.community_page_size)
    return db.execute(stmt).scalars().all()


def get_community(db: Session, community_id: int) -> Community:
    """Return a community with its hobby and members (and their users) loaded."""
    community = db.execute(
        select(Community)
        .where(Community.id == community_id)
        .options(
            selectinload(Community.hobby),
            selectinload(Community.members).selectinload(Member.user),
        )
    ).scalars().first()
    if community is None:
        raise NotFoundError("Community not found")
    return community


def is_member(db: Session, community_id: int, caller: CallerIdentity | None) -> bool:
    """Return True when the caller holds any role in the community."""
    if caller is None or not caller.subject:
        return False
    user = get_user_by_subject(db, caller.subject)
    if user is None:
        return False
    return get_membership(db, user.id, community_id) is not None


def get_communities_by_hobby(db: Session, hobby_id: int) -> Sequence[Community]:
    """Return a hobby's communities, newest first, with their members loaded."""
    return db.execute(
        select(Community)
        .where(Community.hobby_id == hobby_id)
        .options(selectinload(Community.members))
        .order_by(Community.created_at.desc(), Community.id.desc())
    ).scalars().all()
