"""User profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class ProfileUpdate(BaseModel):
    """Update the caller's profile."""

    display_name: str | None = Field(None, min_length=1, max_length=255)
    photo_url: HttpUrl | None = None


class ProfileResponse(BaseModel):
    """User profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    email: str | None
    display_name: str | None
    photo_url: str | None
    created_at: datetime
    updated_at: datetime
