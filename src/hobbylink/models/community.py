"""SQLAlchemy models for communities and their membership."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Table,
    Text,
    func,
    select,
)
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hobbylink.db.session import Base, utcnow
from hobbylink.models.hobby import Hobby
from hobbylink.models.user import User


class MemberRole(str, enum.Enum):
    """Role a user holds inside a community."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


# The community's user-set, kept alongside the role-bearing member rows.
community_user = Table(
    "community_user",
    Base.metadata,
    Column(
        "community_id",
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Member(Base):
    """Join row granting a user a role within a community."""

    __tablename__ = "community_member"
    __table_args__ = (Index("ix_community_member_community_id", "community_id"),)

    # Composite primary key prevents duplicate memberships for the same user.
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role: Mapped[MemberRole] = mapped_column(
        Enum(MemberRole, name="member_role"),
        nullable=False,
        default=MemberRole.MEMBER,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user: Mapped[User] = relationship(User)
    community: Mapped[Community] = relationship("Community", back_populates="members")


class Community(Base):
    """A group of users gathered around one hobby."""

    __tablename__ = "community"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    hobby_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("hobby.id"),
        nullable=False,
        index=True,
    )
    creator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    member_count: Mapped[int] = column_property(
        select(func.count(Member.user_id))
        .where(Member.community_id == id)
        .correlate_except(Member)
        .scalar_subquery()
    )

    hobby: Mapped[Hobby] = relationship(Hobby)
    creator: Mapped[User] = relationship(User)
    members: Mapped[list[Member]] = relationship(
        Member,
        back_populates="community",
        cascade="all, delete-orphan",
        order_by=Member.joined_at,
    )
    users: Mapped[list[User]] = relationship(User, secondary=community_user)

    @property
    def member_ids(self) -> list[int]:
        """Return the user ids of every member."""
        return [member.user_id for member in self.members]
