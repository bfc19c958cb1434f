"""SQLAlchemy models for the HobbyLink application."""

from .comment import Comment
from .community import Community, Member, MemberRole, community_user
from .hobby import Hobby
from .like import Like
from .post import Post
from .user import User

__all__ = [
    "Comment",
    "Community", "Member", "MemberRole", "community_user",
    "Hobby",
    "Like",
    "Post",
    "User",
]
