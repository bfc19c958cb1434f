"""Community-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hobbylink.models.community import MemberRole

from .hobby import HobbyResponse
from .user import AuthorSummary


class CommunityCreate(BaseModel):
    """Schema for creating a new community."""

    name: str = Field(..., min_length=3, max_length=50)
    description: str | None = Field(None, max_length=500)
    hobby_id: int | None = Field(
        None,
        description="Hobby the community belongs to; omitted or empty uses the default hobby",
    )

    @field_validator("hobby_id", mode="before")
    @classmethod
    def _blank_hobby_is_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CommunityResponse(BaseModel):
    """Schema for community information returned by the API."""

    id: int
    name: str
    description: str | None
    hobby_id: int
    creator_id: int
    created_at: datetime
    member_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class CommunityListItem(CommunityResponse):
    """Community row in the community list, with its hobby."""

    hobby: HobbyResponse


class CommunityWithMembers(CommunityResponse):
    """Community row with the ids of its member users."""

    member_ids: list[int]


class MemberResponse(BaseModel):
    """A member of a community and the role they hold."""

    user: AuthorSummary
    role: MemberRole
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommunityDetail(CommunityListItem):
    """Full community view with members and the caller's membership."""

    members: list[MemberResponse]
    is_member: bool = False


CommunitySort = Literal["newest", "oldest", "most_members"]
