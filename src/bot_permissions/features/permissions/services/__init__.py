"""Permission services package."""

from .permission_registry import PermissionRegistry

__all__ = [
    "PermissionRegistry",
]
