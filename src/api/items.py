"""Item API endpoints."""

import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_identity
from src.database import get_db
from src.errors import NotFound, ValidationFailure
from src.models.enums import Capability
from src.models.item import Item
from src.models.list import List
from src.schemas.item import ItemCreate, ItemResponse, ItemUpdate, MarkPurchased
from src.services.access import require_list_access
from src.services.auth import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["items"])

PURCHASE_FIELDS = {"is_purchased", "price", "quantity", "market_id"}


def get_item(
    db: Session,
    item_id: int,
    identity: Identity,
    capability: Capability = Capability.WRITE_ITEMS,
) -> Item:
    """Get an item whose list grants the identity ``capability``."""
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise NotFound("Item not found", details={"item_id": item_id})

    # Access is decided by the parent list
    require_list_access(db, item.list_id, identity, capability)

    return item


def validate_item_market(list_obj: List, market_id: int | None) -> None:
    """An item can only be bought at one of its list's markets."""
    if market_id is None:
        return
    if market_id not in {market.id for market in list_obj.markets}:
        raise ValidationFailure(
            "Market is not associated with this list",
            details={"market_id": market_id, "list_id": list_obj.id},
        )


def mark_purchased(
    item: Item, price: Decimal, quantity: Decimal, market_id: int | None
) -> None:
    """Set the purchase fields together with the flag."""
    if not item.is_purchased:
        item.purchased_at = datetime.now(UTC)
    item.is_purchased = True
    item.price = price
    item.quantity = quantity
    item.market_id = market_id


def clear_purchase(item: Item) -> None:
    """Unmark an item and drop every purchase field with it."""
    item.is_purchased = False
    item.price = None
    item.quantity = None
    item.market_id = None
    item.purchased_at = None


def apply_purchase_update(item: Item, item_data: ItemUpdate) -> None:
    """Apply purchase fields from a partial update, keeping purchase state whole.

    An item is purchased exactly when it has both a price and a quantity, so
    a purchased update must end up with both and an unpurchased one with
    neither.
    """
    fields = item_data.model_fields_set
    if not fields & PURCHASE_FIELDS:
        return

    purchased = item.is_purchased
    if "is_purchased" in fields and item_data.is_purchased is not None:
        purchased = item_data.is_purchased

    if not purchased:
        if any(getattr(item_data, name) is not None for name in ("price", "quantity", "market_id")):
            raise ValidationFailure("Price, quantity and market can only be set on purchased items")
        if item.is_purchased:
            clear_purchase(item)
        return

    price = item_data.price if "price" in fields else item.price
    quantity = item_data.quantity if "quantity" in fields else item.quantity
    market_id = item_data.market_id if "market_id" in fields else item.market_id
    if price is None or quantity is None:
        raise ValidationFailure("Purchased items need a price and a quantity")

    if "market_id" in fields:
        validate_item_market(item.list, market_id)
    mark_purchased(item, price, quantity, market_id)


@router.post(
    "/lists/{list_id}/items", response_model=ItemResponse, status_code=status.HTTP_201_CREATED
)
def create_item(
    list_id: int,
    item_data: ItemCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new item in a list."""
    require_list_access(db, list_id, identity, Capability.WRITE_ITEMS)

    item = Item(
        list_id=list_id,
        name=item_data.name,
        category=item_data.category or None,
        notes=item_data.notes or None,
        is_purchased=False,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.put("/items/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    item_data: ItemUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update an item. Only supplied fields change."""
    item = get_item(db, item_id, identity)
    fields = item_data.model_fields_set

    # Validate everything before touching the item
    if "name" in fields and item_data.name is None:
        raise ValidationFailure("Item name can't be empty")
    apply_purchase_update(item, item_data)

    if item_data.name is not None:
        item.name = item_data.name
    if "category" in fields:
        item.category = item_data.category or None
    if "notes" in fields:
        item.notes = item_data.notes or None

    db.commit()
    db.refresh(item)
    return item


@router.post("/items/{item_id}/mark-purchased", response_model=ItemResponse)
def mark_item_purchased(
    item_id: int,
    purchase: MarkPurchased,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Mark an item purchased with its price, quantity and market."""
    item = get_item(db, item_id, identity)
    validate_item_market(item.list, purchase.market_id)

    mark_purchased(item, purchase.price, purchase.quantity, purchase.market_id)

    db.commit()
    db.refresh(item)
    return item


@router.post("/items/{item_id}/unmark-purchased", response_model=ItemResponse)
def unmark_item_purchased(
    item_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Unmark a purchased item."""
    item = get_item(db, item_id, identity)

    clear_purchase(item)

    db.commit()
    db.refresh(item)
    return item


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an item."""
    item = get_item(db, item_id, identity)

    db.delete(item)
    db.commit()

    logger.debug(f"Deleted item {item_id} for user {identity.user_id}")
