"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .comment import CommentWithAuthor
from .user import AuthorSummary


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1, max_length=10000)
    tags: list[str] = Field(default_factory=list, description="Optional tag list")


class PostUpdate(BaseModel):
    """Schema for editing a post; omitted tags keep their current value."""

    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1, max_length=10000)
    tags: list[str] | None = None


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    content: str
    tags: list[str]
    published: bool
    author_id: int
    community_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostListItem(PostResponse):
    """Post row in a community feed with author summary and counters."""

    author: AuthorSummary
    like_count: int
    comment_count: int


class PostDetail(PostListItem):
    """Full post view with comments (newest first) and who liked it."""

    comments: list[CommentWithAuthor]
    liked_by: list[int]
