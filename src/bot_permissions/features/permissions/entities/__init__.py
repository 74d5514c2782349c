"""Permission entities package.

Domain entities and protocols for the permission tree.
"""

from .principal import Member, Role
from .config_entry import ConfigEntry, BooleanConfigEntry, ConfigEntryGroup
from .protocols import OverrideStore, OverrideManager
from .override_walk import member_level_override, role_level_override, walk_overrides
from .permission_node import PermissionNode, validate_permission_name
from .permission_group import PermissionGroup

__all__ = [
    # Principals
    "Member",
    "Role",
    
    # Default configuration
    "ConfigEntry",
    "BooleanConfigEntry",
    "ConfigEntryGroup",
    
    # Protocols
    "OverrideStore",
    "OverrideManager",
    
    # Resolution
    "member_level_override",
    "role_level_override",
    "walk_overrides",
    
    # Tree
    "PermissionNode",
    "PermissionGroup",
    "validate_permission_name",
]
