"""Enums for model fields."""

from enum import Enum


class Capability(str, Enum):
    """What an identity may do with a list."""

    READ = "read"
    WRITE_ITEMS = "write-items"
    MANAGE = "manage"


OWNER_CAPABILITIES = frozenset({Capability.READ, Capability.WRITE_ITEMS, Capability.MANAGE})
SHARED_CAPABILITIES = frozenset({Capability.READ, Capability.WRITE_ITEMS})
