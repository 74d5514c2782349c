"""Permissions feature for bot-permissions.

Feature-First layout for the permission tree:
- entities/: permission nodes and groups, principals, default config entries,
  the override store protocols and the override walk
- services/: the registry features register their trees with
- repositories/: override store implementations
"""

# Core permission entities and protocols
from .entities import (
    PermissionNode, PermissionGroup, Member, Role,
    BooleanConfigEntry, ConfigEntryGroup,
    OverrideStore, OverrideManager,
)

# Registry
from .services import PermissionRegistry

# Concrete override stores
from .repositories import (
    InMemoryOverrideStore, AsyncPGOverrideStore, RedisOverrideStore,
    create_override_store,
)

__all__ = [
    # Entities
    "PermissionNode",
    "PermissionGroup",
    "Member",
    "Role",
    "BooleanConfigEntry",
    "ConfigEntryGroup",
    
    # Protocols
    "OverrideStore",
    "OverrideManager",
    
    # Services
    "PermissionRegistry",
    
    # Repository Implementations
    "InMemoryOverrideStore",
    "AsyncPGOverrideStore",
    "RedisOverrideStore",
    "create_override_store",
]
