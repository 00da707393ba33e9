"""Market API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_identity
from src.database import get_db
from src.errors import NotFound
from src.models.item import Item
from src.models.list import list_markets
from src.models.market import Market
from src.schemas.market import MarketCreate, MarketResponse, MarketUpdate
from src.services.auth import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/markets", tags=["markets"])


def get_user_market(db: Session, market_id: int, identity: Identity) -> Market:
    """Get a market the user owns."""
    market = (
        db.query(Market)
        .filter(Market.id == market_id, Market.owner_user_id == identity.user_id)
        .first()
    )
    if not market:
        raise NotFound("Market not found", details={"market_id": market_id})
    return market


@router.get("", response_model=list[MarketResponse])
def get_markets(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all markets owned by the current user."""
    return (
        db.query(Market)
        .filter(Market.owner_user_id == identity.user_id)
        .order_by(Market.name)
        .all()
    )


@router.post("", response_model=MarketResponse, status_code=status.HTTP_201_CREATED)
def create_market(
    market_data: MarketCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new market."""
    market = Market(name=market_data.name, owner_user_id=identity.user_id)
    db.add(market)
    db.commit()
    db.refresh(market)
    return market


@router.put("/{market_id}", response_model=MarketResponse)
def update_market(
    market_id: int,
    market_data: MarketUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Rename a market."""
    market = get_user_market(db, market_id, identity)
    market.name = market_data.name
    db.commit()
    db.refresh(market)
    return market


@router.delete("/{market_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_market(
    market_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a market.

    The market is detached from every list and cleared from items bought
    there; the items themselves stay.
    """
    market = get_user_market(db, market_id, identity)

    db.execute(list_markets.delete().where(list_markets.c.market_id == market_id))
    db.query(Item).filter(Item.market_id == market_id).update(
        {Item.market_id: None}, synchronize_session=False
    )
    db.delete(market)
    db.commit()

    logger.info(f"Deleted market {market_id} for user {identity.user_id}")
