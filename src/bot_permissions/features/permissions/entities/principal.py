"""Principal descriptors consumed by the resolver.

Only the minimal shape of a guild member and a role is needed: identity,
guild, and for roles the position that orders them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ....core.value_objects import GuildId, MemberId, RoleId


@dataclass(frozen=True)
class Role:
    """A guild role; a higher ``position`` is more senior."""
    
    id: RoleId
    guild_id: GuildId
    position: int
    name: Optional[str] = None
    
    def __post_init__(self):
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise ValueError(f"Role position must be an integer, got: {self.position!r}")
    
    def __str__(self) -> str:
        return f"Role({self.id}, position={self.position})"


@dataclass(frozen=True)
class Member:
    """A guild member and the roles they carry."""
    
    id: MemberId
    guild_id: GuildId
    roles: Tuple[Role, ...] = field(default_factory=tuple)
    
    def __post_init__(self):
        object.__setattr__(self, 'roles', tuple(self.roles))
        for role in self.roles:
            if role.guild_id != self.guild_id:
                raise ValueError(f"{role} belongs to guild {role.guild_id}, not {self.guild_id}")
    
    def roles_by_priority(self) -> List[Role]:
        """Roles sorted by position, most senior first.

        Roles sharing a position keep their input order; callers must not rely
        on that order.
        """
        return sorted(self.roles, key=lambda role: role.position, reverse=True)
    
    def __str__(self) -> str:
        return f"Member({self.id})"
