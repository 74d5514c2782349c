"""Override resolution shared by member and role checks.

A check looks for an explicit override at one tree level, and if none is
found, repeats the lookup one level up, keyed by the ancestor's own full
name. The walk stops at the first decision or at the root, returning
``None`` when no level decided. Substituting a default is left to the
original call site.
"""

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from .principal import Member, Role
from .protocols import OverrideStore

if TYPE_CHECKING:
    from .permission_node import PermissionNode


logger = logging.getLogger(__name__)


LevelLookup = Callable[["PermissionNode"], Awaitable[Optional[bool]]]


async def member_level_override(
    store: OverrideStore,
    full_name: str,
    member: Member
) -> Optional[bool]:
    """Look up a member's override at a single node.

    The member's own override wins; otherwise roles are consulted from the
    highest position down and the first recorded override is returned.
    """
    result = await store.get_member_override(member.guild_id, full_name, member.id)
    if result is not None:
        logger.debug(f"Found member-specific entry for permission {full_name} for member {member.id}")
        return result
    
    for role in member.roles_by_priority():
        result = await store.get_role_override(member.guild_id, full_name, role.id)
        if result is not None:
            logger.debug(
                f"Found role-specific entry for permission {full_name} "
                f"for member {member.id} via role {role.id}"
            )
            return result
    
    return None


async def role_level_override(
    store: OverrideStore,
    full_name: str,
    role: Role
) -> Optional[bool]:
    """Look up a role's override at a single node."""
    result = await store.get_role_override(role.guild_id, full_name, role.id)
    if result is not None:
        logger.debug(f"Found role-specific entry for permission {full_name} for role {role.id}")
    return result


async def walk_overrides(node: "PermissionNode", lookup: LevelLookup, subject: str) -> Optional[bool]:
    """Apply ``lookup`` to ``node`` and then to each ancestor until one decides."""
    current: Optional["PermissionNode"] = node
    while current is not None:
        logger.debug(f"Checking for permission {current.full_name} for {subject}")
        result = await lookup(current)
        if result is not None:
            return result
        current = current.parent
        if current is not None:
            logger.debug(f"Checking parent permission {current.full_name} of {node.full_name} for {subject}")
    return None
