"""Permission node entity for bot-permissions.

A node is one permission in the tree. It knows its short name, its full
dotted name (the key overrides are stored under), its configured default and
a non-owning link to the group that holds it. Checks walk the node's own
overrides first and then its ancestors'; only the node the check started on
supplies the default.
"""

import logging
import weakref
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from ....config.constants import FULL_NAME_SEPARATOR
from ....core.exceptions import InvalidPermissionNameError, PermissionNotRegisteredError
from .config_entry import BooleanConfigEntry, ConfigEntry
from .override_walk import member_level_override, role_level_override, walk_overrides
from .principal import Member, Role
from .protocols import OverrideStore

if TYPE_CHECKING:
    from ..services.permission_registry import PermissionRegistry


logger = logging.getLogger(__name__)


def validate_permission_name(name: str) -> str:
    """Validate a node's short name."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidPermissionNameError(f"Permission name must be a non-empty string, got: {name!r}")
    if FULL_NAME_SEPARATOR in name:
        raise InvalidPermissionNameError(
            f"Permission name must not contain '{FULL_NAME_SEPARATOR}': {name}",
            details={"name": name}
        )
    return name


class PermissionNode:
    """A single permission in the permission tree."""

    def __init__(
        self,
        name: str,
        default: bool = False,
        description: Optional[str] = None,
        config_entry: Optional[ConfigEntry] = None
    ):
        self.name = validate_permission_name(name)
        self.description = description
        self.full_name = name
        self._config_entry = config_entry or BooleanConfigEntry(name, default, description)
        self._parent_ref: Optional["weakref.ReferenceType[PermissionNode]"] = None
        self._registry: Optional["PermissionRegistry"] = None
        self._described: Dict[str, "PermissionNode"] = {}

    # Tree structure

    @property
    def parent(self) -> Optional["PermissionNode"]:
        """The enclosing group, if any. The group owns this node, not the reverse."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def register_parent(self, parent: "PermissionNode") -> bool:
        """Attach this node under ``parent`` and recompute full names.

        Called by ``PermissionGroup.add_permission``, which also records the
        node in the group's ``children``; use that instead of calling this
        directly. A node has at most one parent; attaching an already-parented
        node to a different parent is refused with a warning.
        """
        current = self.parent
        if current is parent:
            return True
        if current is not None:
            logger.warning(
                f"Permission {self.full_name} already has parent {current.full_name}; "
                f"unregister it before adding it to {parent.full_name}"
            )
            return False

        self._parent_ref = weakref.ref(parent, self._make_parent_callback())
        self.update_full_name()
        parent.register_description(self)
        return True

    def _make_parent_callback(self):
        """Weakref callback that resets the full name once the parent is collected."""
        node_ref = weakref.ref(self)

        def parent_collected(ref: "weakref.ReferenceType[PermissionNode]") -> None:
            node = node_ref()
            if node is not None and node._parent_ref is ref:
                node._parent_ref = None
                node.update_full_name()

        return parent_collected

    def unregister_parent(self, parent: "PermissionNode") -> bool:
        """Detach this node from ``parent``. Stored overrides are left untouched."""
        if self.parent is not parent:
            logger.warning(f"Permission {self.full_name} is not a child of {parent.full_name}")
            return False

        parent.unregister_description(self)
        self._parent_ref = None
        self.update_full_name()
        return True

    def update_full_name(self) -> None:
        parent = self.parent
        if parent is None:
            self.full_name = self.name
        else:
            self.full_name = f"{parent.full_name}{FULL_NAME_SEPARATOR}{self.name}"

    def walk(self) -> Iterator["PermissionNode"]:
        """Yield this node and all of its descendants."""
        yield self

    # Descriptions

    def register_description(self, node: "PermissionNode") -> None:
        self._described[node.name] = node

    def unregister_description(self, node: "PermissionNode") -> None:
        if self._described.get(node.name) is node:
            del self._described[node.name]

    def description_tree(self) -> Dict[str, Any]:
        """Nested descriptions of this node and the nodes registered under it."""
        tree: Dict[str, Any] = {}
        if self.description:
            tree["description"] = self.description
        if self._described:
            tree["children"] = {
                name: node.description_tree() for name, node in self._described.items()
            }
        return tree

    # Registry binding

    @property
    def registry(self) -> Optional["PermissionRegistry"]:
        return self._registry

    def register(self, registry: "PermissionRegistry") -> None:
        self._registry = registry

    def unregister(self) -> None:
        self._registry = None

    def get_store(self) -> OverrideStore:
        if self._registry is None:
            raise PermissionNotRegisteredError(
                f"Permission {self.full_name} is not registered",
                details={"full_name": self.full_name}
            )
        return self._registry.store

    # Defaults

    def get_config_entry(self) -> ConfigEntry:
        return self._config_entry

    def get_default(self) -> bool:
        """The locally configured default. Never consults the parent or the store."""
        if isinstance(self._config_entry, BooleanConfigEntry):
            return self._config_entry.get()
        return False

    # Checks

    async def check_full(self, member: Member) -> bool:
        """Decide whether ``member`` holds this permission."""
        result = await self.check_full_no_default(member)
        if result is not None:
            return result
        logger.debug(f"Returning default for permission {self.full_name} for member {member.id}")
        return self.get_default()

    async def check_full_no_default(self, member: Member) -> Optional[bool]:
        """Explicit decision for ``member`` from this node or an ancestor, or None."""
        async def lookup(node: PermissionNode) -> Optional[bool]:
            return await member_level_override(node.get_store(), node.full_name, member)

        return await walk_overrides(self, lookup, f"member {member.id}")

    async def check_role(self, role: Role) -> bool:
        """Decide whether holders of ``role`` get this permission from the role alone."""
        result = await self.check_role_no_default(role)
        if result is not None:
            return result
        logger.debug(f"Returning default for permission {self.full_name} for role {role.id}")
        return self.get_default()

    async def check_role_no_default(self, role: Role) -> Optional[bool]:
        async def lookup(node: PermissionNode) -> Optional[bool]:
            return await role_level_override(node.get_store(), node.full_name, role)

        return await walk_overrides(self, lookup, f"role {role.id}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.full_name!r}, default={self.get_default()})"
