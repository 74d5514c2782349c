"""In-memory override store.

Keeps overrides in two dictionaries keyed by ``(guild, full name, subject)``.
Suitable for tests and single-process bots that persist nothing.
"""

import logging
from typing import Dict, Optional, Tuple

from ....core.value_objects import GuildId, MemberId, RoleId


logger = logging.getLogger(__name__)


OverrideKey = Tuple[str, str, str]


class InMemoryOverrideStore:
    """Dictionary-backed implementation of OverrideStore and OverrideManager."""
    
    def __init__(self):
        self._members: Dict[OverrideKey, bool] = {}
        self._roles: Dict[OverrideKey, bool] = {}
    
    @staticmethod
    def _key(guild_id: GuildId, full_name: str, subject_id) -> OverrideKey:
        return (str(guild_id), full_name, str(subject_id))
    
    async def get_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId
    ) -> Optional[bool]:
        return self._members.get(self._key(guild_id, full_name, member_id))
    
    async def get_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId
    ) -> Optional[bool]:
        return self._roles.get(self._key(guild_id, full_name, role_id))
    
    async def set_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId,
        value: bool
    ) -> None:
        self._members[self._key(guild_id, full_name, member_id)] = bool(value)
        logger.debug(f"Set member override {full_name}={value} for member {member_id} in guild {guild_id}")
    
    async def set_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId,
        value: bool
    ) -> None:
        self._roles[self._key(guild_id, full_name, role_id)] = bool(value)
        logger.debug(f"Set role override {full_name}={value} for role {role_id} in guild {guild_id}")
    
    async def clear_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId
    ) -> bool:
        return self._members.pop(self._key(guild_id, full_name, member_id), None) is not None
    
    async def clear_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId
    ) -> bool:
        return self._roles.pop(self._key(guild_id, full_name, role_id), None) is not None
    
    async def clear_node(self, guild_id: GuildId, full_name: str) -> int:
        removed = 0
        for table in (self._members, self._roles):
            for key in [k for k in table if k[0] == str(guild_id) and k[1] == full_name]:
                del table[key]
                removed += 1
        return removed
    
    def __len__(self) -> int:
        return len(self._members) + len(self._roles)
