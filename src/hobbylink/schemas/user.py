"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class AuthorSummary(BaseModel):
    """Public summary of a user shown next to their content."""

    id: int
    external_id: str = Field(..., description="Identity-provider subject id")
    name: str | None
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)
