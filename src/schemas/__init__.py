"""Pydantic schemas for API requests and responses."""

from src.schemas.analytics import AnalyticsSummary, DayAnalytics, MarketAnalytics
from src.schemas.auth import IdentityResponse
from src.schemas.item import ItemCreate, ItemResponse, ItemUpdate, MarkPurchased
from src.schemas.list import (
    ListCreate,
    ListDetailResponse,
    ListResponse,
    ListShareCreate,
    ListShareResponse,
    ListUpdate,
    SharedUser,
)
from src.schemas.market import MarketCreate, MarketResponse, MarketUpdate
from src.schemas.profile import ProfileResponse, ProfileUpdate

__all__ = [
    "IdentityResponse",
    "MarketCreate",
    "MarketUpdate",
    "MarketResponse",
    "ListCreate",
    "ListUpdate",
    "ListResponse",
    "ListDetailResponse",
    "ListShareCreate",
    "ListShareResponse",
    "SharedUser",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "MarkPurchased",
    "ProfileUpdate",
    "ProfileResponse",
    "DayAnalytics",
    "MarketAnalytics",
    "AnalyticsSummary",
]
