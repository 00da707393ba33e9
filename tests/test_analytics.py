"""Analytics tests."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from src.api.dependencies import get_analytics_service
from src.errors import StorageFailure
from src.main import app
from src.models.item import Item
from src.models.list import List
from src.models.market import Market
from src.services.analytics_service import AnalyticsService
from src.services.auth import Identity

ALICE = Identity(user_id="user-alice", email="alice@example.com")

# 2024-01-07 is a Sunday, 2024-01-10 a Wednesday
SUNDAY = datetime(2024, 1, 7, 15, 0, tzinfo=UTC)
WEDNESDAY = datetime(2024, 1, 10, 9, 30, tzinfo=UTC)


def add_purchase(db, list_id, price, quantity, purchased_at, market_id=None, name="Item"):
    item = Item(
        list_id=list_id,
        name=name,
        is_purchased=True,
        price=Decimal(str(price)),
        quantity=Decimal(str(quantity)),
        market_id=market_id,
        purchased_at=purchased_at,
    )
    db.add(item)
    db.commit()
    return item


@pytest.fixture
def alice_list(db):
    lst = List(name="Alice's", owner_user_id=ALICE.user_id)
    db.add(lst)
    db.commit()
    return lst


def test_empty_analytics(client, auth_headers):
    """Test that analytics without purchases are all zeros, never errors."""
    summary = client.get("/api/analytics/summary", headers=auth_headers)
    assert summary.status_code == 200
    assert summary.json() == {
        "total_spent": 0,
        "total_items": 0,
        "total_lists": 0,
        "avg_list_cost": 0,
        "most_purchased_day": None,
        "best_market": None,
    }

    assert client.get("/api/analytics/by-day", headers=auth_headers).json() == []
    assert client.get("/api/analytics/by-market", headers=auth_headers).json() == []


def test_analytics_require_auth(client):
    """Test that analytics need a token."""
    assert client.get("/api/analytics/summary").status_code == 401


def test_shared_purchase_counts_for_owner_and_invitee(client, auth_headers, other_auth_headers):
    """Test that a purchase on a shared list shows up in both users' by-market."""
    market = client.post("/api/markets", headers=auth_headers, json={"name": "M"}).json()
    lst = client.post(
        "/api/lists", headers=auth_headers, json={"name": "List 1", "market_ids": [market["id"]]}
    ).json()
    rice = client.post(
        f"/api/lists/{lst['id']}/items", headers=auth_headers, json={"name": "Rice"}
    ).json()
    client.post(
        f"/api/lists/{lst['id']}/share", headers=auth_headers, json={"email": "b@example.com"}
    )

    response = client.post(
        f"/api/items/{rice['id']}/mark-purchased",
        headers=other_auth_headers,
        json={"price": 10, "quantity": 2, "market_id": market["id"]},
    )
    assert response.status_code == 200

    for headers in (auth_headers, other_auth_headers):
        by_market = client.get("/api/analytics/by-market", headers=headers).json()
        assert by_market == [
            {
                "id": market["id"],
                "name": "M",
                "items_purchased": 1,
                "total_spent": 20,
                "avg_item_cost": 20,
                "lists_count": 1,
            }
        ]

        summary = client.get("/api/analytics/summary", headers=headers).json()
        assert summary["total_spent"] == 20
        assert summary["total_items"] == 1
        assert summary["total_lists"] == 1
        assert summary["avg_list_cost"] == 20
        assert summary["best_market"] == "M"
        assert summary["most_purchased_day"] is not None


def test_stranger_sees_nothing(client, auth_headers, stranger_headers):
    """Test that purchases on lists a user can't see are out of scope."""
    lst = client.post("/api/lists", headers=auth_headers, json={"name": "Private"}).json()
    item = client.post(
        f"/api/lists/{lst['id']}/items", headers=auth_headers, json={"name": "Cheese"}
    ).json()
    client.post(
        f"/api/items/{item['id']}/mark-purchased",
        headers=auth_headers,
        json={"price": 7, "quantity": 1},
    )

    summary = client.get("/api/analytics/summary", headers=stranger_headers).json()
    assert summary["total_items"] == 0
    assert client.get("/api/analytics/by-day", headers=stranger_headers).json() == []


def test_revoked_share_leaves_scope(client, auth_headers, other_auth_headers):
    """Test that unsharing removes the list's purchases from the invitee's analytics."""
    lst = client.post("/api/lists", headers=auth_headers, json={"name": "Shared"}).json()
    item = client.post(
        f"/api/lists/{lst['id']}/items", headers=auth_headers, json={"name": "Tea"}
    ).json()
    client.post(
        f"/api/items/{item['id']}/mark-purchased",
        headers=auth_headers,
        json={"price": 3, "quantity": 1},
    )
    client.post(
        f"/api/lists/{lst['id']}/share", headers=auth_headers, json={"email": "b@example.com"}
    )
    assert client.get("/api/analytics/summary", headers=other_auth_headers).json()[
        "total_items"
    ] == 1

    client.delete(f"/api/lists/{lst['id']}/share/b@example.com", headers=auth_headers)
    assert client.get("/api/analytics/summary", headers=other_auth_headers).json()[
        "total_items"
    ] == 0


def test_by_day_omits_empty_weekdays(db, alice_list):
    """Test per-weekday totals and averages, with empty days left out."""
    add_purchase(db, alice_list.id, 5, 1, SUNDAY)
    add_purchase(db, alice_list.id, 2, 3, WEDNESDAY)
    add_purchase(db, alice_list.id, 4, 1, WEDNESDAY)

    days = AnalyticsService(db, timezone="UTC", locale="en").by_day(ALICE)

    assert [(d.day_of_week, d.day_name) for d in days] == [(0, "Sunday"), (3, "Wednesday")]
    sunday, wednesday = days
    assert sunday.purchase_count == 1
    assert sunday.total_spent == Decimal("5")
    assert sunday.avg_spent == Decimal("5")
    assert wednesday.purchase_count == 2
    assert wednesday.total_spent == Decimal("10")
    assert wednesday.avg_spent == Decimal("5")


def test_by_day_localized_names(db, alice_list):
    """Test Portuguese weekday names."""
    add_purchase(db, alice_list.id, 1, 1, SUNDAY)

    days = AnalyticsService(db, timezone="UTC", locale="pt").by_day(ALICE)
    assert [d.day_name for d in days] == ["Domingo"]


def test_by_day_uses_configured_timezone(db, alice_list):
    """Test that weekdays are bucketed in the configured timezone."""
    # Sunday 02:00 UTC is still Saturday evening in Sao Paulo
    add_purchase(db, alice_list.id, 1, 1, datetime(2024, 1, 7, 2, 0, tzinfo=UTC))

    days = AnalyticsService(db, timezone="America/Sao_Paulo", locale="en").by_day(ALICE)
    assert [d.day_of_week for d in days] == [6]


def test_by_day_api(client, auth_headers):
    """Test that a purchase made now lands on today's weekday."""
    lst = client.post("/api/lists", headers=auth_headers, json={"name": "Today"}).json()
    item = client.post(
        f"/api/lists/{lst['id']}/items", headers=auth_headers, json={"name": "Bread"}
    ).json()
    client.post(
        f"/api/items/{item['id']}/mark-purchased",
        headers=auth_headers,
        json={"price": 2.5, "quantity": 2},
    )

    days = client.get("/api/analytics/by-day", headers=auth_headers).json()
    assert len(days) == 1
    assert days[0]["day_of_week"] == datetime.now(UTC).isoweekday() % 7
    assert days[0]["purchase_count"] == 1
    assert days[0]["total_spent"] == 5
    assert days[0]["avg_spent"] == 5


def test_by_market_includes_zero_purchase_markets(db, alice_list):
    """Test that every owned market is listed, with zeros when unused."""
    busy = Market(name="Busy", owner_user_id=ALICE.user_id)
    idle = Market(name="Idle", owner_user_id=ALICE.user_id)
    foreign = Market(name="Someone Else's", owner_user_id="user-zed")
    db.add_all([busy, idle, foreign])
    db.commit()

    second_list = List(name="Second", owner_user_id=ALICE.user_id)
    db.add(second_list)
    db.commit()

    add_purchase(db, alice_list.id, 3, 2, SUNDAY, market_id=busy.id)
    add_purchase(db, second_list.id, 4, 1, WEDNESDAY, market_id=busy.id)
    add_purchase(db, alice_list.id, 9, 1, WEDNESDAY)

    markets = AnalyticsService(db).by_market(ALICE)

    assert [m.name for m in markets] == ["Busy", "Idle"]
    busy_stats, idle_stats = markets
    assert busy_stats.items_purchased == 2
    assert busy_stats.total_spent == Decimal("10")
    assert busy_stats.avg_item_cost == Decimal("5")
    assert busy_stats.lists_count == 2
    assert idle_stats.items_purchased == 0
    assert idle_stats.total_spent == 0
    assert idle_stats.avg_item_cost == 0
    assert idle_stats.lists_count == 0


def test_summary_derives_extremes(db, alice_list):
    """Test totals, average per list, busiest weekday and cheapest market."""
    cheap = Market(name="Cheap", owner_user_id=ALICE.user_id)
    pricey = Market(name="Pricey", owner_user_id=ALICE.user_id)
    db.add_all([cheap, pricey])
    db.commit()
    second_list = List(name="Second", owner_user_id=ALICE.user_id)
    db.add(second_list)
    db.commit()

    add_purchase(db, alice_list.id, 2, 1, WEDNESDAY, market_id=cheap.id)
    add_purchase(db, alice_list.id, 4, 1, WEDNESDAY, market_id=cheap.id)
    add_purchase(db, second_list.id, 20, 1, SUNDAY, market_id=pricey.id)

    summary = AnalyticsService(db, timezone="UTC", locale="en").summary(ALICE)

    assert summary.total_spent == Decimal("26")
    assert summary.total_items == 3
    assert summary.total_lists == 2
    assert summary.avg_list_cost == Decimal("13")
    assert summary.most_purchased_day == "Wednesday"
    assert summary.best_market == "Cheap"


def test_unpurchased_items_are_ignored(db, alice_list):
    """Test that only purchased items count."""
    db.add(Item(list_id=alice_list.id, name="Pending", is_purchased=False))
    db.commit()
    add_purchase(db, alice_list.id, 1, 1, SUNDAY)

    summary = AnalyticsService(db).summary(ALICE)
    assert summary.total_items == 1
    assert summary.total_spent == Decimal("1")


def test_sums_are_exact(client, auth_headers):
    """Test that cents don't pick up binary float error."""
    lst = client.post("/api/lists", headers=auth_headers, json={"name": "Cents"}).json()
    for _ in range(3):
        item = client.post(
            f"/api/lists/{lst['id']}/items", headers=auth_headers, json={"name": "Gum"}
        ).json()
        client.post(
            f"/api/items/{item['id']}/mark-purchased",
            headers=auth_headers,
            json={"price": 0.1, "quantity": 1},
        )

    summary = client.get("/api/analytics/summary", headers=auth_headers).json()
    assert summary["total_spent"] == 0.3


def test_storage_failure_is_raised(db):
    """Test that database errors surface as StorageFailure."""
    service = AnalyticsService(db)
    error = OperationalError("SELECT", {}, Exception("connection refused"))

    with patch.object(db, "query", side_effect=error):
        with pytest.raises(StorageFailure):
            service.summary(ALICE)


def test_storage_failure_response(client, auth_headers):
    """Test that a failing store is reported as 503, not retried."""
    session = MagicMock()
    session.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    app.dependency_overrides[get_analytics_service] = lambda: AnalyticsService(session)

    response = client.get("/api/analytics/by-market", headers=auth_headers)
    assert response.status_code == 503
    assert response.json()["code"] == "STORAGE_FAILURE"
    assert session.query.call_count == 1
