"""Constants and enums for bot-permissions.

This module defines the constants shared by the permission tree and the
override store implementations.
"""

from enum import Enum
from typing import Final


# Permission tree
FULL_NAME_SEPARATOR: Final[str] = "."


class StoreBackend(str, Enum):
    """Override store backends selectable through settings."""
    
    MEMORY = "memory"
    POSTGRES = "postgres"
    REDIS = "redis"


class OverrideSubject(str, Enum):
    """Kind of principal an override is recorded for."""
    
    MEMBER = "member"
    ROLE = "role"


# Database layout
class OverrideTables:
    """Table names used by the AsyncPG override store."""
    
    MEMBER: Final[str] = "member_permissions"
    ROLE: Final[str] = "role_permissions"


# Redis layout
class OverrideKeys:
    """Key patterns used by the Redis override store."""
    
    NODE: Final[str] = "{prefix}:{guild_id}:{full_name}:{subject}"


# Values stored for overrides in text-based backends
TRUE_VALUES: Final[frozenset] = frozenset({"1", "true", "yes", "allow"})
FALSE_VALUES: Final[frozenset] = frozenset({"0", "false", "no", "deny"})
