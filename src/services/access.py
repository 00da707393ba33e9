"""List access control.

A list is visible to its owner and to every principal it has been shared
with. ``resolve_list_access`` answers that for one list, and
``visible_list_clause`` expresses the same rule as a SQL filter for queries
that span many lists (list index, analytics). Both match shares against
``Identity.principals`` so the two forms cannot drift apart.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import exists, or_
from sqlalchemy.orm import Session

from src.errors import AccessDenied, NotFound
from src.models.enums import OWNER_CAPABILITIES, SHARED_CAPABILITIES, Capability
from src.models.list import List, ListShare
from src.services.auth import Identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListAccess:
    """Resolved access of one identity to one list."""

    list: List
    capabilities: frozenset[Capability]

    @property
    def is_owner(self) -> bool:
        return Capability.MANAGE in self.capabilities

    def allows(self, capability: Capability) -> bool:
        return capability in self.capabilities


def shared_with_clause(identity: Identity):
    """EXISTS clause: a share on the current list row names this identity."""
    return exists().where(
        ListShare.list_id == List.id,
        ListShare.principal.in_(identity.principals),
    )


def visible_list_clause(identity: Identity):
    """Filter selecting every list the identity owns or has been shared."""
    return or_(List.owner_user_id == identity.user_id, shared_with_clause(identity))


def resolve_list_access(db: Session, list_id: int, identity: Identity) -> ListAccess | None:
    """Resolve what the identity may do with a list.

    Returns None when the list does not exist. A list the identity can't see
    resolves to an access with no capabilities.
    """
    list_obj = db.query(List).filter(List.id == list_id).first()
    if list_obj is None:
        return None

    if list_obj.owner_user_id is not None and list_obj.owner_user_id == identity.user_id:
        return ListAccess(list=list_obj, capabilities=OWNER_CAPABILITIES)

    share = (
        db.query(ListShare.id)
        .filter(
            ListShare.list_id == list_id,
            ListShare.principal.in_(identity.principals),
        )
        .first()
    )
    if share:
        return ListAccess(list=list_obj, capabilities=SHARED_CAPABILITIES)

    return ListAccess(list=list_obj, capabilities=frozenset())


def can_access(db: Session, list_id: int, identity: Identity) -> bool:
    """Check whether the identity may see (and edit items on) a list."""
    access = resolve_list_access(db, list_id, identity)
    return access is not None and access.allows(Capability.READ)


def require_list_access(
    db: Session,
    list_id: int,
    identity: Identity,
    capability: Capability = Capability.READ,
) -> ListAccess:
    """Resolve access and fail unless the identity holds ``capability``."""
    access = resolve_list_access(db, list_id, identity)
    if access is None:
        raise NotFound("List not found", details={"list_id": list_id})

    if not access.allows(capability):
        logger.warning(
            f"Denied {capability.value} on list {list_id} for user {identity.user_id}"
        )
        if capability == Capability.MANAGE and access.allows(Capability.READ):
            raise AccessDenied("Only the owner of this list can do that")
        raise AccessDenied("Access denied")

    return access
