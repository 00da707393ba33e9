"""Market schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MarketCreate(BaseModel):
    """Create a new market."""

    name: str = Field(..., min_length=1, max_length=255)


class MarketUpdate(BaseModel):
    """Rename a market."""

    name: str = Field(..., min_length=1, max_length=255)


class MarketResponse(BaseModel):
    """Market response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime
    updated_at: datetime
