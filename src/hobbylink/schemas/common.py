"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Acknowledgement returned by actions that have no other result."""

    success: bool = Field(True, description="Always true; failures are reported as errors.")


class LikeToggleResponse(SuccessResponse):
    """Result of toggling a like."""

    liked: bool = Field(..., description="True if the post is liked after the toggle.")
