"""
Override Store Factory for bot-permissions

Factory functions for creating the override store selected by settings,
with the backend client built from the same settings.
"""
import logging
from typing import Optional

import asyncpg
import redis.asyncio as redis

from ....config.constants import StoreBackend
from ....config.settings import PermissionSettings, get_settings
from ....core.exceptions import ConfigurationError
from .asyncpg_override_store import AsyncPGOverrideStore
from .memory_override_store import InMemoryOverrideStore
from .redis_override_store import RedisOverrideStore


logger = logging.getLogger(__name__)


async def create_override_store(settings: Optional[PermissionSettings] = None):
    """
    Create the override store configured in ``settings``.
    
    Args:
        settings: Permission settings; defaults to the cached environment settings
        
    Returns:
        An InMemoryOverrideStore, AsyncPGOverrideStore or RedisOverrideStore
        
    Raises:
        ConfigurationError: if the selected backend has no connection URL
    """
    if settings is None:
        settings = get_settings()
    
    backend = settings.store_backend
    logger.info(f"Creating {backend.value} override store")
    
    if backend == StoreBackend.POSTGRES:
        if not settings.database_url:
            raise ConfigurationError("database_url is required for the postgres override store")
        pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.database_pool_min_size,
            max_size=settings.database_pool_max_size,
            command_timeout=settings.database_command_timeout,
        )
        store = AsyncPGOverrideStore(
            pool,
            schema=settings.database_schema,
            command_timeout=settings.database_command_timeout
        )
        try:
            await store.ensure_schema()
        except BaseException:
            logger.error("Closing override store pool after schema setup failed")
            await pool.close()
            raise
        return store
    
    if backend == StoreBackend.REDIS:
        if not settings.redis_url:
            raise ConfigurationError("redis_url is required for the redis override store")
        client = redis.from_url(
            settings.redis_url,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_timeout,
        )
        return RedisOverrideStore(client, key_prefix=settings.redis_key_prefix)
    
    return InMemoryOverrideStore()
