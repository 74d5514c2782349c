"""Exceptions module for bot-permissions.

This module provides the complete exception hierarchy for bot-permissions.
"""

from .base import (
    BotPermissionsError,
    create_error_response,
)

from .domain import (
    # Configuration Errors
    ConfigurationError,
    InvalidSchemaError,
    
    # Store Errors
    StoreError,
    
    # Permission Tree Errors
    PermissionTreeError,
    InvalidPermissionNameError,
    PermissionNotRegisteredError,
    PermissionNotFoundError,
)

__all__ = [
    # Base
    "BotPermissionsError",
    "create_error_response",
    
    # Configuration
    "ConfigurationError",
    "InvalidSchemaError",
    
    # Store
    "StoreError",
    
    # Permission Tree
    "PermissionTreeError",
    "InvalidPermissionNameError",
    "PermissionNotRegisteredError",
    "PermissionNotFoundError",
]
