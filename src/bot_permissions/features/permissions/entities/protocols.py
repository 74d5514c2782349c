"""Protocol interfaces for the permission feature.

The resolver reads overrides through ``OverrideStore`` only. Administrative
commands write through ``OverrideManager``; the resolver never does.
"""

from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable

from ....core.value_objects import GuildId, MemberId, RoleId


@runtime_checkable
class OverrideStore(Protocol):
    """Read-only override lookups keyed by guild, node full name and subject.

    Implementations return ``None`` for a missing key and raise ``StoreError``
    on transport or storage failure.
    """
    
    @abstractmethod
    async def get_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId
    ) -> Optional[bool]:
        """Get the override recorded for a member at a node, if any."""
        ...
    
    @abstractmethod
    async def get_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId
    ) -> Optional[bool]:
        """Get the override recorded for a role at a node, if any."""
        ...


@runtime_checkable
class OverrideManager(Protocol):
    """Write operations used by administrative commands."""
    
    @abstractmethod
    async def set_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId,
        value: bool
    ) -> None:
        """Create or replace a member override."""
        ...
    
    @abstractmethod
    async def set_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId,
        value: bool
    ) -> None:
        """Create or replace a role override."""
        ...
    
    @abstractmethod
    async def clear_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId
    ) -> bool:
        """Delete a member override. Returns True if one existed."""
        ...
    
    @abstractmethod
    async def clear_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId
    ) -> bool:
        """Delete a role override. Returns True if one existed."""
        ...
    
    @abstractmethod
    async def clear_node(self, guild_id: GuildId, full_name: str) -> int:
        """Delete every override recorded at a node in a guild. Returns the count removed."""
        ...
