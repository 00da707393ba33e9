"""Spend analytics over the purchases a user can see."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.errors import StorageFailure
from src.models.item import Item
from src.models.list import List
from src.models.market import Market
from src.schemas.analytics import AnalyticsSummary, DayAnalytics, MarketAnalytics
from src.services.access import visible_list_clause
from src.services.auth import Identity
from src.services.labels import weekday_name

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class Purchase:
    """One purchased item on a list visible to the caller."""

    item_id: int
    list_id: int
    market_id: int | None
    cost: Decimal
    purchased_at: datetime


def to_decimal(value) -> Decimal:
    """Coerce a stored numeric to Decimal without going through binary floats."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def safe_divide(total: Decimal, count: int) -> Decimal:
    """Average that is zero when there is nothing to average."""
    if count == 0:
        return ZERO
    return total / count


class AnalyticsService:
    """Computes per-day, per-market and summary spend statistics.

    Every statistic is built from the same scoped set of purchases: purchased
    items on lists the identity owns or has been shared. By-day and by-market
    are the primitive aggregates; the summary picks its extremes out of them.
    """

    def __init__(self, db: Session, timezone: str | None = None, locale: str | None = None):
        settings = get_settings()
        self.db = db
        self.timezone = ZoneInfo(timezone or settings.analytics_timezone)
        self.locale = locale or settings.locale

    def load_purchases(self, identity: Identity) -> list[Purchase]:
        """Load every in-scope purchase with its line cost (price x quantity)."""
        try:
            rows = (
                self.db.query(
                    Item.id,
                    Item.list_id,
                    Item.market_id,
                    Item.price,
                    Item.quantity,
                    Item.purchased_at,
                    Item.updated_at,
                )
                .join(List, Item.list_id == List.id)
                .filter(Item.is_purchased.is_(True), visible_list_clause(identity))
                .order_by(Item.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load purchases for user {identity.user_id}: {e}")
            raise StorageFailure("Could not load purchase data") from e

        purchases = []
        for item_id, list_id, market_id, price, quantity, purchased_at, updated_at in rows:
            if price is None or quantity is None:
                # Rows written before purchase state was enforced
                logger.warning(f"Purchased item {item_id} has no price or quantity; skipped")
                continue
            purchases.append(
                Purchase(
                    item_id=item_id,
                    list_id=list_id,
                    market_id=market_id,
                    cost=to_decimal(price) * to_decimal(quantity),
                    purchased_at=purchased_at or updated_at,
                )
            )
        return purchases

    def day_of_week(self, moment: datetime) -> int:
        """Sunday-based day of week (0 = Sunday) in the configured timezone."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        return moment.astimezone(self.timezone).isoweekday() % 7

    def by_day(self, identity: Identity) -> list[DayAnalytics]:
        """Spend per weekday. Weekdays without purchases are left out."""
        return self._aggregate_by_day(self.load_purchases(identity))

    def by_market(self, identity: Identity) -> list[MarketAnalytics]:
        """Spend per market.

        Lists every market the identity owns, with zeros when nothing was
        bought there, plus any other market an in-scope purchase was
        assigned to (e.g. the owner's market on a shared list).
        """
        return self._aggregate_by_market(identity, self.load_purchases(identity))

    def summary(self, identity: Identity) -> AnalyticsSummary:
        """Totals plus the busiest weekday and the cheapest market on average."""
        purchases = self.load_purchases(identity)
        days = self._aggregate_by_day(purchases)
        markets = self._aggregate_by_market(identity, purchases)

        total_spent = sum((p.cost for p in purchases), ZERO)
        total_lists = len({p.list_id for p in purchases})

        # Ties resolve to the first entry in primitive order
        most_purchased_day = max(days, key=lambda d: d.purchase_count, default=None)
        best_market = min(
            (m for m in markets if m.items_purchased > 0),
            key=lambda m: m.avg_item_cost,
            default=None,
        )

        return AnalyticsSummary(
            total_spent=total_spent,
            total_items=len(purchases),
            total_lists=total_lists,
            avg_list_cost=safe_divide(total_spent, total_lists),
            most_purchased_day=most_purchased_day.day_name if most_purchased_day else None,
            best_market=best_market.name if best_market else None,
        )

    def _aggregate_by_day(self, purchases: list[Purchase]) -> list[DayAnalytics]:
        counts: dict[int, int] = defaultdict(int)
        totals: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for purchase in purchases:
            day = self.day_of_week(purchase.purchased_at)
            counts[day] += 1
            totals[day] += purchase.cost

        return [
            DayAnalytics(
                day_of_week=day,
                day_name=weekday_name(day, self.locale),
                purchase_count=counts[day],
                total_spent=totals[day],
                avg_spent=safe_divide(totals[day], counts[day]),
            )
            for day in sorted(counts)
        ]

    def _aggregate_by_market(
        self, identity: Identity, purchases: list[Purchase]
    ) -> list[MarketAnalytics]:
        purchased_market_ids = {p.market_id for p in purchases if p.market_id is not None}
        try:
            markets = (
                self.db.query(Market)
                .filter(
                    or_(
                        Market.owner_user_id == identity.user_id,
                        Market.id.in_(sorted(purchased_market_ids)),
                    )
                )
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load markets for user {identity.user_id}: {e}")
            raise StorageFailure("Could not load market data") from e

        by_market: dict[int, list[Purchase]] = defaultdict(list)
        for purchase in purchases:
            if purchase.market_id is not None:
                by_market[purchase.market_id].append(purchase)

        results = []
        for market in markets:
            market_purchases = by_market.get(market.id, [])
            total_spent = sum((p.cost for p in market_purchases), ZERO)
            results.append(
                MarketAnalytics(
                    id=market.id,
                    name=market.name,
                    items_purchased=len(market_purchases),
                    total_spent=total_spent,
                    avg_item_cost=safe_divide(total_spent, len(market_purchases)),
                    lists_count=len({p.list_id for p in market_purchases}),
                )
            )

        results.sort(key=lambda m: (-m.total_spent, m.name.lower(), m.id))
        return results
