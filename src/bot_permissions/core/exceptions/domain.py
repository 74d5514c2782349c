"""Domain-specific exceptions for bot-permissions.

This module defines exceptions raised by the permission tree, the override
stores and the configuration layer.
"""

from .base import BotPermissionsError


# Configuration Errors
class ConfigurationError(BotPermissionsError):
    """Raised when there's a configuration issue."""
    pass


class InvalidSchemaError(ConfigurationError):
    """Raised when a database schema or table name is invalid or potentially dangerous."""
    pass


# Store Errors
class StoreError(BotPermissionsError):
    """Raised when the override store fails to answer a lookup.

    A check that raises this has no result: callers must treat it as
    "unknown", never as denied or allowed.
    """
    pass


# Permission Tree Errors
class PermissionTreeError(BotPermissionsError):
    """Base class for permission tree errors."""
    pass


class InvalidPermissionNameError(PermissionTreeError):
    """Raised when a permission node name is empty or contains the separator."""
    pass


class PermissionNotRegisteredError(PermissionTreeError):
    """Raised when a node is checked before being bound to a registry."""
    pass


class PermissionNotFoundError(PermissionTreeError):
    """Raised when no registered node has the requested full name."""
    pass
