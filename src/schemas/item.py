"""Item schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.types import Money


class ItemCreate(BaseModel):
    """Create a new item."""

    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=2000)


class ItemUpdate(BaseModel):
    """Update an item. Only supplied fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=2000)
    is_purchased: bool | None = None
    price: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    quantity: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=3)
    market_id: int | None = None


class MarkPurchased(BaseModel):
    """Record the purchase of an item."""

    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    quantity: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)
    market_id: int | None = None


class ItemResponse(BaseModel):
    """Item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    list_id: int
    name: str
    category: str | None
    notes: str | None
    is_purchased: bool
    price: Money | None
    quantity: Money | None
    market_id: int | None
    purchased_at: datetime | None
    created_at: datetime
    updated_at: datetime
