"""SQLAlchemy models."""

from src.models.item import Item
from src.models.list import List, ListShare, list_markets
from src.models.market import Market
from src.models.user_profile import UserProfile

__all__ = [
    "Market",
    "List",
    "ListShare",
    "list_markets",
    "Item",
    "UserProfile",
]
