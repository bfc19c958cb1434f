"""Hobby-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class HobbyResponse(BaseModel):
    """Schema for hobby information returned by the API."""

    id: int
    name: str
    description: str | None
    tags: list[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
