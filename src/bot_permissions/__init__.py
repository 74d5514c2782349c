"""bot-permissions - permission tree and override resolution for guild chat bots.

Features register trees of ``PermissionNode``/``PermissionGroup`` with a
``PermissionRegistry`` bound to an override store, then check members and
roles against individual nodes.
"""

from .__version__ import __version__

from .config import (
    PermissionSettings,
    get_settings,
    setup_logging,
    StoreBackend,
)

from .core.exceptions import (
    BotPermissionsError,
    ConfigurationError,
    StoreError,
    PermissionTreeError,
    InvalidPermissionNameError,
    PermissionNotRegisteredError,
    PermissionNotFoundError,
    create_error_response,
)

from .core.value_objects import GuildId, MemberId, RoleId

from .features.permissions import (
    PermissionNode,
    PermissionGroup,
    Member,
    Role,
    OverrideStore,
    OverrideManager,
    PermissionRegistry,
    InMemoryOverrideStore,
    AsyncPGOverrideStore,
    RedisOverrideStore,
    create_override_store,
)

__all__ = [
    # Configuration
    "PermissionSettings",
    "get_settings",
    "setup_logging",
    "StoreBackend",
    
    # Exceptions
    "BotPermissionsError",
    "ConfigurationError",
    "StoreError",
    "PermissionTreeError",
    "InvalidPermissionNameError",
    "PermissionNotRegisteredError",
    "PermissionNotFoundError",
    "create_error_response",
    
    # Identifiers
    "GuildId",
    "MemberId",
    "RoleId",
    
    # Permission tree
    "PermissionNode",
    "PermissionGroup",
    "Member",
    "Role",
    "OverrideStore",
    "OverrideManager",
    "PermissionRegistry",
    
    # Override stores
    "InMemoryOverrideStore",
    "AsyncPGOverrideStore",
    "RedisOverrideStore",
    "create_override_store",
    
    # Version
    "__version__",
]
