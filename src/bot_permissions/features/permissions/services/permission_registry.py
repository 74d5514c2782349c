"""Permission registry for bot-permissions.

The registry is what features register their permission trees with. It binds
every node to the override store, keeps the top-level nodes by name, and
aggregates their default config entries so operators can load defaults for
the whole tree at once.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from ....config.constants import FULL_NAME_SEPARATOR
from ....config.defaults import load_defaults_file
from ....core.exceptions import PermissionNotFoundError
from ..entities import (
    ConfigEntryGroup,
    Member,
    OverrideStore,
    PermissionGroup,
    PermissionNode,
    Role,
)


logger = logging.getLogger(__name__)


class PermissionRegistry:
    """Top-level container binding permission trees to an override store."""
    
    def __init__(self, store: OverrideStore, name: str = "permissions"):
        self.store = store
        self.roots: Dict[str, PermissionNode] = {}
        self._config = ConfigEntryGroup(name)
    
    # Registration
    
    def register_permission(self, permission: PermissionNode) -> bool:
        """Register a top-level node and bind its whole subtree to this registry."""
        if permission.parent is not None:
            logger.warning(
                f"Permission {permission.full_name} has a parent; register its root instead"
            )
            return False
        
        existing = self.roots.get(permission.name)
        if existing is permission:
            return True
        if existing is not None:
            logger.warning(f"Permission {permission.name} is already registered; replacing it")
            self.unregister_permission(existing)
        
        permission.update_full_name()
        permission.register(self)
        self.roots[permission.name] = permission
        self._config.add_entry(permission.get_config_entry())
        logger.info(f"Registered permission {permission.name} ({sum(1 for _ in permission.walk())} nodes)")
        return True
    
    def unregister_permission(self, permission: PermissionNode) -> bool:
        """Detach a top-level node. Its stored overrides are left in place."""
        if self.roots.get(permission.name) is not permission:
            return False
        
        permission.unregister()
        del self.roots[permission.name]
        self._config.remove_entry(permission.get_config_entry())
        logger.info(f"Unregistered permission {permission.name}")
        return True
    
    # Lookup
    
    def get(self, full_name: str) -> Optional[PermissionNode]:
        """Find a registered node by its full dotted name."""
        root_name, _, rest = full_name.partition(FULL_NAME_SEPARATOR)
        root = self.roots.get(root_name)
        if root is None or not rest:
            return root
        if isinstance(root, PermissionGroup):
            return root.get(rest)
        return None
    
    def require(self, full_name: str) -> PermissionNode:
        permission = self.get(full_name)
        if permission is None:
            raise PermissionNotFoundError(
                f"Permission not found: {full_name}",
                details={"full_name": full_name}
            )
        return permission
    
    def __contains__(self, full_name: object) -> bool:
        return isinstance(full_name, str) and self.get(full_name) is not None
    
    def __iter__(self) -> Iterator[PermissionNode]:
        for root in list(self.roots.values()):
            yield from root.walk()
    
    def __len__(self) -> int:
        return sum(1 for _ in self)
    
    def description_tree(self) -> Dict[str, Any]:
        """Descriptions of every registered tree, keyed by root name."""
        return {name: root.description_tree() for name, root in self.roots.items()}
    
    # Defaults
    
    def load_defaults(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a nested defaults document; nodes it omits revert to their static default."""
        return self._config.parse(data)
    
    def load_defaults_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        return self.load_defaults(load_defaults_file(path))
    
    def dump_defaults(self) -> Dict[str, Any]:
        return self._config.dump()
    
    # Checks by name
    
    async def check(self, full_name: str, member: Member) -> bool:
        """Check a permission for a member by full name."""
        return await self.require(full_name).check_full(member)
    
    async def check_role(self, full_name: str, role: Role) -> bool:
        """Check a permission for a role by full name."""
        return await self.require(full_name).check_role(role)
