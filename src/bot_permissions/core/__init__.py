"""Core building blocks shared by bot-permissions features."""

from .exceptions import (
    BotPermissionsError,
    ConfigurationError,
    StoreError,
    PermissionTreeError,
)
from .value_objects import GuildId, MemberId, RoleId

__all__ = [
    "BotPermissionsError",
    "ConfigurationError",
    "StoreError",
    "PermissionTreeError",
    "GuildId",
    "MemberId",
    "RoleId",
]
