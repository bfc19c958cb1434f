"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse, CommentWithAuthor
from .common import LikeToggleResponse, SuccessResponse
from .community import (
    CommunityCreate,
    CommunityDetail,
    CommunityListItem,
    CommunityResponse,
    CommunityWithMembers,
    MemberResponse,
)
from .hobby import HobbyResponse
from .post import PostCreate, PostDetail, PostListItem, PostResponse, PostUpdate
from .user import AuthorSummary

__all__ = [
    "AuthorSummary",
    "CommentCreate", "CommentResponse", "CommentWithAuthor",
    "CommunityCreate", "CommunityDetail", "CommunityListItem",
    "CommunityResponse", "CommunityWithMembers", "MemberResponse",
    "HobbyResponse",
    "LikeToggleResponse", "SuccessResponse",
    "PostCreate", "PostDetail", "PostListItem", "PostResponse", "PostUpdate",
]
