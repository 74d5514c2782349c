"""Value objects for identifiers in bot-permissions.

Guild, member and role identifiers are opaque platform snowflakes. They are
normalised to strings so that ``GuildId(42)`` and ``GuildId("42")`` compare
equal and produce the same override store keys.
"""

from dataclasses import dataclass
from typing import Union


Snowflake = Union[int, str]


def _normalize_snowflake(kind: str, value: Snowflake) -> str:
    """Validate a raw identifier and return its string form."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{kind} must be an int or str, got: {type(value).__name__}")
    normalized = str(value).strip()
    if not normalized:
        raise ValueError(f"{kind} must be a non-empty identifier")
    return normalized


@dataclass(frozen=True)
class GuildId:
    """Guild identifier value object."""
    value: str
    
    def __post_init__(self):
        object.__setattr__(self, 'value', _normalize_snowflake("GuildId", self.value))
    
    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MemberId:
    """Guild member identifier value object."""
    value: str
    
    def __post_init__(self):
        object.__setattr__(self, 'value', _normalize_snowflake("MemberId", self.value))
    
    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RoleId:
    """Role identifier value object."""
    value: str
    
    def __post_init__(self):
        object.__setattr__(self, 'value', _normalize_snowflake("RoleId", self.value))
    
    def __str__(self) -> str:
        return self.value
