"""Analytics schemas."""

from pydantic import BaseModel

from src.schemas.types import Money


class DayAnalytics(BaseModel):
    """Spend on one day of the week (0 = Sunday)."""

    day_of_week: int
    day_name: str
    purchase_count: int
    total_spent: Money
    avg_spent: Money


class MarketAnalytics(BaseModel):
    """Spend at one market."""

    id: int
    name: str
    items_purchased: int
    total_spent: Money
    avg_item_cost: Money
    lists_count: int


class AnalyticsSummary(BaseModel):
    """Overall spend across every visible list."""

    total_spent: Money
    total_items: int
    total_lists: int
    avg_list_cost: Money
    most_purchased_day: str | None
    best_market: str | None
