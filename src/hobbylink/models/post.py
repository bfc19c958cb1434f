"""SQLAlchemy models for posts and related attributes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    desc,
    func,
    select,
)
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hobbylink.db.session import Base, utcnow
from hobbylink.models.comment import Comment
from hobbylink.models.community import Community
from hobbylink.models.like import Like
from hobbylink.models.user import User


class Post(Base):
    """Primary content entity produced by community members."""

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    # Every post belongs to exactly one community.
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    like_count: Mapped[int] = column_property(
        select(func.count(Like.user_id))
        .where(Like.post_id == id)
        .correlate_except(Like)
        .scalar_subquery()
    )
    comment_count: Mapped[int] = column_property(
        select(func.count(Comment.id))
        .where(Comment.post_id == id)
        .correlate_except(Comment)
        .scalar_subquery()
    )

    author: Mapped[User] = relationship(User)
    community: Mapped[Community] = relationship(Community)
    # Removal of dependents is done explicitly by the delete action.
    comments: Mapped[list[Comment]] = relationship(
        Comment,
        back_populates="post",
        order_by=[desc(Comment.created_at), desc(Comment.id)],
        passive_deletes=True,
    )
    likes: Mapped[list[Like]] = relationship(Like, passive_deletes=True)

    @property
    def liked_by(self) -> list[int]:
        """Return the ids of users who liked this post."""
        return [like.user_id for like in self.likes]
