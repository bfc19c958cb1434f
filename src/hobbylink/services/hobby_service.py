"""Read-only hobby lookups."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from hobbylink.models import Hobby
from hobbylink.services.errors import NotFoundError

__all__ = ["get_hobbies", "get_hobby"]


def get_hobbies(db: Session) -> Sequence[Hobby]:
    """Return every hobby ordered alphabetically by name."""
    return db.execute(select(Hobby).order_by(Hobby.name.asc())).scalars().all()


def get_hobby(db: Session, hobby_id: int) -> Hobby:
    """Return a single hobby or raise ``NotFoundError``."""
    hobby = db.get(Hobby, hobby_id)
    if hobby is None:
        raise NotFoundError("Hobby not found")
    return hobby
