# src/hobbylink/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .comments import router as comments_router
from .communities import router as communities_router
from .hobbies import router as hobbies_router
from .posts import router as posts_router

__all__ = [
    "comments_router",
    "communities_router",
    "hobbies_router",
    "posts_router",
]
