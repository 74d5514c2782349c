"""
Redis implementation of the override store.

Each ``(guild, full name)`` pair has one hash per subject kind, mapping the
subject id to ``"1"`` (allow) or ``"0"`` (deny). Lookups are a single
``HGET``, so a check costs one round trip per tree level and role.
"""
import asyncio
import logging
from typing import Any, Optional, Union

import redis.asyncio as redis
from redis.exceptions import RedisError

from ....config.constants import FALSE_VALUES, TRUE_VALUES, OverrideKeys, OverrideSubject
from ....core.exceptions import StoreError
from ....core.value_objects import GuildId, MemberId, RoleId


logger = logging.getLogger(__name__)


_CLIENT_ERRORS = (RedisError, OSError, asyncio.TimeoutError)


class RedisOverrideStore:
    """Redis implementation of OverrideStore and OverrideManager."""
    
    def __init__(self, redis_client: redis.Redis, key_prefix: str = "bot_permissions"):
        self._redis = redis_client
        self._key_prefix = key_prefix
    
    def _node_key(self, guild_id: GuildId, full_name: str, subject: OverrideSubject) -> str:
        return OverrideKeys.NODE.format(
            prefix=self._key_prefix,
            guild_id=guild_id,
            full_name=full_name,
            subject=subject.value
        )
    
    def _failure(self, action: str, key: str, error: Exception) -> StoreError:
        logger.error(f"Failed to {action} override key {key}: {error}")
        return StoreError(f"Failed to {action} override: {error}", details={"key": key})
    
    @staticmethod
    def _decode(key: str, raw: Union[bytes, str, None]) -> Optional[bool]:
        if raw is None:
            return None
        value = raw.decode() if isinstance(raw, bytes) else str(raw)
        value = value.strip().lower()
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise StoreError(f"Unreadable override value {value!r}", details={"key": key})
    
    async def _get(self, key: str, field: Any) -> Optional[bool]:
        try:
            raw = await self._redis.hget(key, str(field))
        except _CLIENT_ERRORS as e:
            raise self._failure("read", key, e) from e
        return self._decode(key, raw)
    
    async def _set(self, key: str, field: Any, value: bool) -> None:
        try:
            await self._redis.hset(key, str(field), "1" if value else "0")
        except _CLIENT_ERRORS as e:
            raise self._failure("write", key, e) from e
    
    async def _clear(self, key: str, field: Any) -> bool:
        try:
            return bool(await self._redis.hdel(key, str(field)))
        except _CLIENT_ERRORS as e:
            raise self._failure("delete", key, e) from e
    
    # Lookups
    
    async def get_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId
    ) -> Optional[bool]:
        return await self._get(self._node_key(guild_id, full_name, OverrideSubject.MEMBER), member_id)
    
    async def get_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId
    ) -> Optional[bool]:
        return await self._get(self._node_key(guild_id, full_name, OverrideSubject.ROLE), role_id)
    
    # Administration
    
    async def set_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId,
        value: bool
    ) -> None:
        await self._set(self._node_key(guild_id, full_name, OverrideSubject.MEMBER), member_id, value)
    
    async def set_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId,
        value: bool
    ) -> None:
        await self._set(self._node_key(guild_id, full_name, OverrideSubject.ROLE), role_id, value)
    
    async def clear_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId
    ) -> bool:
        return await self._clear(self._node_key(guild_id, full_name, OverrideSubject.MEMBER), member_id)
    
    async def clear_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId
    ) -> bool:
        return await self._clear(self._node_key(guild_id, full_name, OverrideSubject.ROLE), role_id)
    
    async def clear_node(self, guild_id: GuildId, full_name: str) -> int:
        removed = 0
        for subject in OverrideSubject:
            key = self._node_key(guild_id, full_name, subject)
            try:
                async with self._redis.pipeline(transaction=True) as pipe:
                    pipe.hlen(key)
                    pipe.delete(key)
                    count, _ = await pipe.execute()
                removed += count
            except _CLIENT_ERRORS as e:
                raise self._failure("delete", key, e) from e
        return removed
