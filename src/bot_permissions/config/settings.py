"""
Settings for the bot-permissions library.

Values are read from the environment (prefix ``BOT_PERMISSIONS_``) or from a
``.env`` file, so an embedding bot can pick its override store without code
changes.
"""
import re
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import StoreBackend


_IDENTIFIER_RE = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')


class PermissionSettings(BaseSettings):
    """Runtime settings for the permission engine and its override store."""
    
    model_config = SettingsConfigDict(
        env_prefix="BOT_PERMISSIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Store selection
    store_backend: StoreBackend = Field(default=StoreBackend.MEMORY)
    
    # PostgreSQL store
    database_url: Optional[str] = Field(default=None)
    database_schema: str = Field(default="public")
    database_pool_min_size: int = Field(default=1, ge=1)
    database_pool_max_size: int = Field(default=10, ge=1)
    database_command_timeout: float = Field(default=5.0, gt=0)
    
    # Redis store
    redis_url: Optional[str] = Field(default=None)
    redis_key_prefix: str = Field(default="bot_permissions")
    redis_socket_timeout: float = Field(default=5.0, gt=0)
    
    # Operator-supplied default values for permission nodes
    defaults_file: Optional[Path] = Field(default=None)
    
    @field_validator("database_schema")
    @classmethod
    def validate_schema(cls, value: str) -> str:
        """Schema names are interpolated into SQL, so only plain identifiers are allowed."""
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Invalid database schema name: {value}")
        return value
    
    @field_validator("redis_key_prefix")
    @classmethod
    def validate_key_prefix(cls, value: str) -> str:
        if not value or ":" in value:
            raise ValueError("Redis key prefix must be non-empty and must not contain ':'")
        return value
    
    @model_validator(mode="after")
    def validate_pool_sizes(self) -> "PermissionSettings":
        if self.database_pool_min_size > self.database_pool_max_size:
            raise ValueError("database_pool_min_size cannot exceed database_pool_max_size")
        return self


@lru_cache()
def get_settings() -> PermissionSettings:
    """Get cached permission settings instance."""
    return PermissionSettings()
