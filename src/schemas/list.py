"""List schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.schemas.item import ItemResponse
from src.schemas.market import MarketResponse


class ListCreate(BaseModel):
    """Create a new list."""

    name: str = Field(..., min_length=1, max_length=255)
    market_ids: list[int] | None = None


class ListUpdate(BaseModel):
    """Update a list. ``market_ids`` replaces the whole association when given."""

    name: str | None = Field(None, min_length=1, max_length=255)
    market_ids: list[int] | None = None


class ListResponse(BaseModel):
    """List response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    owner_user_id: str | None
    created_at: datetime
    updated_at: datetime
    markets: list[MarketResponse] = []
    is_shared: bool = False


class SharedUser(BaseModel):
    """A principal a list is shared with."""

    email: str
    display_name: str | None = None


class ListDetailResponse(ListResponse):
    """List with items; ``shared_users`` is only filled for the owner."""

    items: list[ItemResponse] = []
    shared_users: list[SharedUser] | None = None


class ListShareCreate(BaseModel):
    """Share a list with someone by email."""

    email: EmailStr = Field(..., max_length=255)


class ListShareResponse(BaseModel):
    """List share response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    list_id: int
    principal: str
    created_at: datetime
