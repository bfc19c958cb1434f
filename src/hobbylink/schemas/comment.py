"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import AuthorSummary


class CommentCreate(BaseModel):
    """Schema for creating or editing a comment."""

    content: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    content: str
    author_id: int
    post_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentWithAuthor(CommentResponse):
    """Comment together with its author's summary."""

    author: AuthorSummary
