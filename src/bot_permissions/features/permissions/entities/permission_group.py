"""Permission group entity for bot-permissions.

A group is a node that owns child nodes. Adding or removing a child keeps the
child's parent link, its full name and the group's aggregate config entry in
step with the ``children`` mapping.
"""

import logging
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, Optional

from ....config.constants import FULL_NAME_SEPARATOR
from .config_entry import ConfigEntryGroup
from .permission_node import PermissionNode

if TYPE_CHECKING:
    from ..services.permission_registry import PermissionRegistry


logger = logging.getLogger(__name__)


class PermissionGroup(PermissionNode):
    """A permission node with named children."""

    def __init__(
        self,
        name: str,
        children: Optional[Iterable[PermissionNode]] = None,
        description: Optional[str] = None
    ):
        super().__init__(
            name,
            default=False,
            description=description,
            config_entry=ConfigEntryGroup(name, description=description)
        )
        self.children: Dict[str, PermissionNode] = {}
        for child in children or []:
            self.add_permission(child)

    def get_config_entry(self) -> ConfigEntryGroup:
        return self._config_entry

    def _is_ancestor_or_self(self, node: PermissionNode) -> bool:
        current: Optional[PermissionNode] = self
        while current is not None:
            if current is node:
                return True
            current = current.parent
        return False

    def add_permission(self, permission: PermissionNode) -> bool:
        """Add ``permission`` as a child of this group.

        A child with the same name is replaced (last registration wins). A
        node that already belongs to another group, or that would create a
        cycle, is refused.
        """
        existing = self.children.get(permission.name)
        if existing is permission:
            return True

        if self._is_ancestor_or_self(permission):
            logger.warning(f"Refusing to add {permission.full_name} to its own subtree {self.full_name}")
            return False

        if permission.parent is not None:
            logger.warning(
                f"Permission {permission.full_name} already has a parent; "
                f"unregister it before adding it to {self.full_name}"
            )
            return False

        if existing is not None:
            logger.warning(
                f"Permission {self.full_name}{FULL_NAME_SEPARATOR}{permission.name} is already "
                f"registered; replacing it"
            )
            self.remove_permission(existing)

        self.get_config_entry().add_entry(permission.get_config_entry())
        permission.register_parent(self)
        self.children[permission.name] = permission
        if self._registry is not None:
            permission.register(self._registry)
        return True

    def remove_permission(self, permission: PermissionNode) -> bool:
        """Detach ``permission`` if it is the child registered under its name."""
        if self.children.get(permission.name) is not permission:
            return False

        self.get_config_entry().remove_entry(permission.get_config_entry())
        permission.unregister_parent(self)
        del self.children[permission.name]
        if self._registry is not None:
            permission.unregister()
        return True

    def update_full_name(self) -> None:
        super().update_full_name()
        for child in self.children.values():
            child.update_full_name()

    def register(self, registry: "PermissionRegistry") -> None:
        super().register(registry)
        for child in self.children.values():
            child.register(registry)

    def unregister(self) -> None:
        super().unregister()
        for child in self.children.values():
            child.unregister()

    def get(self, path: str) -> Optional[PermissionNode]:
        """Resolve a dotted path relative to this group, e.g. ``"queue.clear"``."""
        node: PermissionNode = self
        for part in path.split(FULL_NAME_SEPARATOR):
            if not isinstance(node, PermissionGroup):
                return None
            child = node.children.get(part)
            if child is None:
                return None
            node = child
        return node

    def walk(self) -> Iterator[PermissionNode]:
        yield self
        for child in self.children.values():
            yield from child.walk()
