"""Idempotent find-or-create helpers for users and hobbies.

Both helpers are safe to call from inside a unit of work: the insert runs in
a SAVEPOINT, and losing a race against a concurrent insert of the same key
rolls back only that savepoint before the winner's row is re-read.

Provisioning a user takes two steps. ``resolve_profile`` talks to the
identity provider and must run before the unit of work opens, so no store
transaction is held while the request waits on the network. ``ensure_user``
then inserts or re-reads the row inside the unit of work.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hobbylink.core.settings import settings
from hobbylink.models import Hobby, User
from hobbylink.services.errors import InternalError, UnauthorizedError
from hobbylink.services.identity import (
    CallerIdentity,
    IdentityProfile,
    IdentityProviderClient,
    IdentityProviderError,
)

__all__ = [
    "require_caller",
    "get_user_by_subject",
    "resolve_profile",
    "ensure_user",
    "ensure_hobby",
    "ensure_default_hobby",
]

logger = logging.getLogger(__name__)

FALLBACK_USER_NAME = "User"


def require_caller(caller: CallerIdentity | None) -> str:
    """Return the caller's subject id or raise ``UnauthorizedError``."""
    if caller is None or not caller.subject or not caller.subject.strip():
        raise UnauthorizedError("Unauthorized")
    return caller.subject


def placeholder_email(subject: str) -> str:
    return f"user-{subject}@example.com"


def get_user_by_subject(db: Session, subject: str) -> User | None:
    """Return the local user row for an identity-provider subject."""
    return db.execute(select(User).where(User.external_id == subject)).scalars().first()


def _end_read_transaction(db: Session) -> None:
    # A lookup-only transaction still holds SQLite's shared lock.
    if db.in_transaction() and not (db.new or db.dirty or db.deleted):
        db.rollback()


async def resolve_profile(
    db: Session,
    caller: CallerIdentity | None,
    identity: IdentityProviderClient,
) -> IdentityProfile | None:
    """Fetch the provider profile of a caller that has no local row yet.

    Args:
        db: Session outside any unit of work.
        caller: Resolved caller identity, or ``None`` when unauthenticated.
        identity: Client used to look up profile details for new users.

    Returns:
        The profile to provision from, or ``None`` if the caller already has
        a local row.

    Raises:
        UnauthorizedError: If there is no caller or the provider does not know it.
        InternalError: If the identity provider is unavailable.
    """
    subject = require_caller(caller)
    if get_user_by_subject(db, subject) is not None:
        return None

    _end_read_transaction(db)
    try:
        profile = await identity.fetch_profile(subject)
    except IdentityProviderError as exc:
        logger.error("Profile lookup for %s failed: %s", subject, exc)
        raise InternalError("Identity provider unavailable") from exc
    if profile is None:
        raise UnauthorizedError("User not found")
    return profile


def ensure_user(
    db: Session,
    caller: CallerIdentity | None,
    profile: IdentityProfile | None,
) -> User:
    """Return the caller's local user row, inserting it from ``profile`` if missing.

    The new row is flushed, not committed. A missing row with no profile
    means ``resolve_profile`` was skipped and is treated as an unknown user.
    """
    subject = require_caller(caller)
    user = get_user_by_subject(db, subject)
    if user is not None:
        return user
    if profile is None:
        raise UnauthorizedError("User not found")

    user = User(
        external_id=subject,
        email=profile.email or placeholder_email(subject),
        name=profile.name or FALLBACK_USER_NAME,
        image_url=profile.image_url,
    )
    try:
        with db.begin_nested():
            db.add(user)
    except IntegrityError:
        # A concurrent first action by the same subject already provisioned it.
        logger.info("User %s provisioned concurrently; re-reading", subject)
        existing = get_user_by_subject(db, subject)
        if existing is None:
            raise
        return existing

    logger.info("Provisioned local user %s for subject %s", user.id, subject)
    return user


def ensure_hobby(
    db: Session,
    name: str,
    *,
    description: str | None = None,
    tags: list[str] | None = None,
) -> Hobby:
    """Return the hobby called ``name``, creating it if it does not exist yet."""
    stmt = select(Hobby).where(Hobby.name == name)
    hobby = db.execute(stmt).scalars().first()
    if hobby is not None:
        return hobby

    hobby = Hobby(name=name, description=description, tags=list(tags or []))
    try:
        with db.begin_nested():
            db.add(hobby)
    except IntegrityError:
        existing = db.execute(stmt).scalars().first()
        if existing is None:
            raise
        return existing

    logger.info("Created hobby %r (%s)", name, hobby.id)
    return hobby


def ensure_default_hobby(db: Session) -> Hobby:
    """Return the hobby used for communities created without one."""
    return ensure_hobby(
        db,
        settings.default_hobby_name,
        description=settings.default_hobby_description,
        tags=[settings.default_hobby_name.lower()],
    )
