"""List API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_identity
from src.database import get_db
from src.errors import Conflict, NotFound, ValidationFailure
from src.models.enums import Capability
from src.models.item import Item
from src.models.list import List, ListShare
from src.models.market import Market
from src.models.user_profile import UserProfile
from src.schemas.list import (
    ListCreate,
    ListDetailResponse,
    ListResponse,
    ListShareCreate,
    ListShareResponse,
    ListUpdate,
    SharedUser,
)
from src.services.access import require_list_access, visible_list_clause
from src.services.auth import Identity
from src.services.labels import copy_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/lists", tags=["lists"])


def resolve_markets(
    db: Session,
    market_ids: list[int],
    identity: Identity,
    list_obj: List | None = None,
) -> list[Market]:
    """Load the markets to associate with a list.

    A market qualifies when the caller owns it or it is already associated
    with the list being edited (a shared user keeping the owner's markets).
    """
    wanted = list(dict.fromkeys(market_ids))
    if not wanted:
        return []

    markets = {m.id: m for m in db.query(Market).filter(Market.id.in_(wanted)).all()}
    missing = [market_id for market_id in wanted if market_id not in markets]
    if missing:
        raise NotFound("Market not found", details={"market_ids": missing})

    current_ids = {m.id for m in list_obj.markets} if list_obj is not None else set()
    foreign = [
        market_id
        for market_id in wanted
        if markets[market_id].owner_user_id != identity.user_id and market_id not in current_ids
    ]
    if foreign:
        raise ValidationFailure(
            "Markets must belong to you or already be on the list",
            details={"market_ids": foreign},
        )

    return [markets[market_id] for market_id in wanted]


def build_list_response(list_obj: List, identity: Identity) -> ListResponse:
    """Serialize a list with its markets, flagged when the caller isn't the owner."""
    list_response = ListResponse.model_validate(list_obj)
    list_response.is_shared = list_obj.owner_user_id != identity.user_id
    return list_response


def get_shared_users(db: Session, list_obj: List) -> list[SharedUser]:
    """Principals a list is shared with, with display names where a profile exists."""
    principals = [share.principal for share in list_obj.shares]
    if not principals:
        return []

    profiles = (
        db.query(UserProfile)
        .filter(or_(UserProfile.email.in_(principals), UserProfile.user_id.in_(principals)))
        .all()
    )
    names: dict[str, str | None] = {}
    for profile in profiles:
        if profile.email:
            names[profile.email] = profile.display_name
        names[profile.user_id] = profile.display_name

    return [
        SharedUser(email=principal, display_name=names.get(principal)) for principal in principals
    ]


@router.get("", response_model=list[ListResponse])
def get_lists(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all lists owned by or shared with the current user."""
    lists = (
        db.query(List)
        .filter(visible_list_clause(identity))
        .order_by(List.created_at.desc(), List.id.desc())
        .all()
    )
    return [build_list_response(lst, identity) for lst in lists]


@router.post("", response_model=ListResponse, status_code=status.HTTP_201_CREATED)
def create_list(
    list_data: ListCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new list."""
    markets = resolve_markets(db, list_data.market_ids or [], identity)

    new_list = List(name=list_data.name, owner_user_id=identity.user_id)
    new_list.markets = markets
    db.add(new_list)
    db.commit()
    db.refresh(new_list)

    return build_list_response(new_list, identity)


@router.get("/{list_id}", response_model=ListDetailResponse)
def get_list(
    list_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a list with its markets and items."""
    access = require_list_access(db, list_id, identity, Capability.READ)
    list_obj = access.list

    detail = ListDetailResponse.model_validate(list_obj)
    detail.is_shared = not access.is_owner
    if access.is_owner:
        detail.shared_users = get_shared_users(db, list_obj)
    return detail


@router.put("/{list_id}", response_model=ListResponse)
def update_list(
    list_id: int,
    list_data: ListUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Rename a list and/or replace its markets.

    Shared users may do this too; only deleting and sharing are owner-only.
    """
    list_obj = require_list_access(db, list_id, identity, Capability.WRITE_ITEMS).list

    if list_data.market_ids is not None:
        list_obj.markets = resolve_markets(db, list_data.market_ids, identity, list_obj)
    if list_data.name is not None:
        list_obj.name = list_data.name

    db.commit()
    db.refresh(list_obj)

    return build_list_response(list_obj, identity)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_list(
    list_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a list with its items, market links and shares (owner only)."""
    list_obj = require_list_access(db, list_id, identity, Capability.MANAGE).list

    for item in list(list_obj.items):
        db.delete(item)
    list_obj.markets.clear()
    for share in list(list_obj.shares):
        db.delete(share)
    db.delete(list_obj)
    db.commit()

    logger.info(f"Deleted list {list_id} for user {identity.user_id}")


@router.post(
    "/{list_id}/duplicate", response_model=ListResponse, status_code=status.HTTP_201_CREATED
)
def duplicate_list(
    list_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Copy a list, its markets and its items into a new list owned by the caller.

    Purchase state is not copied: every item on the copy starts unpurchased.
    """
    original = require_list_access(db, list_id, identity, Capability.READ).list

    new_list = List(name=copy_name(original.name), owner_user_id=identity.user_id)
    new_list.markets = list(original.markets)
    db.add(new_list)
    db.flush()

    for item in original.items:
        db.add(
            Item(
                list_id=new_list.id,
                name=item.name,
                category=item.category,
                notes=item.notes,
                is_purchased=False,
            )
        )

    db.commit()
    db.refresh(new_list)

    logger.info(f"Duplicated list {list_id} into {new_list.id} for user {identity.user_id}")
    return build_list_response(new_list, identity)


@router.post(
    "/{list_id}/share", response_model=ListShareResponse, status_code=status.HTTP_201_CREATED
)
def share_list(
    list_id: int,
    share_data: ListShareCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Share a list with someone by email (owner only).

    The invitee doesn't need to have signed in yet; the share matches their
    identity by email once they do.
    """
    require_list_access(db, list_id, identity, Capability.MANAGE)

    principal = str(share_data.email).strip().lower()
    if principal == identity.email:
        raise ValidationFailure("You can't share a list with yourself")

    existing_share = (
        db.query(ListShare)
        .filter(ListShare.list_id == list_id, ListShare.principal == principal)
        .first()
    )
    if existing_share:
        raise Conflict("List already shared with this user", details={"email": principal})

    share = ListShare(list_id=list_id, principal=principal)
    db.add(share)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("List already shared with this user", details={"email": principal}) from e
    db.refresh(share)

    logger.info(f"Shared list {list_id} with {principal}")
    return share


@router.delete("/{list_id}/share/{principal}", status_code=status.HTTP_204_NO_CONTENT)
def unshare_list(
    list_id: int,
    principal: str,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a principal's access to a list (owner only)."""
    require_list_access(db, list_id, identity, Capability.MANAGE)

    candidates = tuple(dict.fromkeys((principal, principal.strip().lower())))
    share = (
        db.query(ListShare)
        .filter(ListShare.list_id == list_id, ListShare.principal.in_(candidates))
        .first()
    )
    if not share:
        raise NotFound("Share not found", details={"principal": principal})

    removed = share.principal
    db.delete(share)
    db.commit()

    logger.info(f"Removed {removed} from list {list_id}")
