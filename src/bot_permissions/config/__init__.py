"""Configuration module for bot-permissions."""

from .constants import (
    FULL_NAME_SEPARATOR,
    StoreBackend,
    OverrideSubject,
    OverrideTables,
    OverrideKeys,
)
from .settings import PermissionSettings, get_settings
from .defaults import load_defaults_file
from .logging_config import (
    setup_logging,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Constants
    "FULL_NAME_SEPARATOR",
    "StoreBackend",
    "OverrideSubject",
    "OverrideTables",
    "OverrideKeys",
    
    # Settings
    "PermissionSettings",
    "get_settings",
    "load_defaults_file",
    
    # Logging
    "setup_logging",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
