"""AsyncPG-based override store implementation.

Member and role overrides live in two tables of a configurable schema, each
keyed by guild, permission full name and subject id. Every driver failure is
reported as ``StoreError`` so a check never mistakes an outage for "no
override".
"""

import asyncio
import logging
import re
from typing import Any, Optional

import asyncpg

from ....config.constants import OverrideTables
from ....core.exceptions import InvalidSchemaError, StoreError
from ....core.value_objects import GuildId, MemberId, RoleId


logger = logging.getLogger(__name__)


_IDENTIFIER_RE = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


class AsyncPGOverrideStore:
    """AsyncPG implementation of OverrideStore and OverrideManager."""
    
    def __init__(self, pool: asyncpg.Pool, schema: str = "public", command_timeout: float = 5.0):
        """Initialize with a connection pool and the schema holding the override tables."""
        self._pool = pool
        self._schema = self._validate_schema_name(schema)
        self._timeout = command_timeout
        self._member_table = f"{self._schema}.{OverrideTables.MEMBER}"
        self._role_table = f"{self._schema}.{OverrideTables.ROLE}"
    
    @staticmethod
    def _validate_schema_name(schema_name: str) -> str:
        """Validate schema name to prevent SQL injection."""
        if not _IDENTIFIER_RE.match(schema_name or ""):
            raise InvalidSchemaError(f"Invalid schema name: {schema_name}")
        return schema_name
    
    async def _run(self, method: str, query: str, *args: Any) -> Any:
        try:
            async with self._pool.acquire() as conn:
                return await getattr(conn, method)(query, *args, timeout=self._timeout)
        except _DRIVER_ERRORS as e:
            logger.error(f"Override store query failed in schema {self._schema}: {e}")
            raise StoreError(
                f"Override store query failed: {e}",
                details={"schema": self._schema}
            ) from e
    
    @staticmethod
    def _deleted_count(status: Optional[str]) -> int:
        """Parse the row count from an asyncpg status string such as ``'DELETE 2'``."""
        try:
            return int((status or "").rsplit(" ", 1)[-1])
        except ValueError:
            return 0
    
    async def ensure_schema(self) -> None:
        """Create the schema and override tables if they do not exist."""
        await self._run("execute", f"CREATE SCHEMA IF NOT EXISTS {self._schema}")
        for table, subject_column in (
            (self._member_table, "member_id"),
            (self._role_table, "role_id"),
        ):
            await self._run(
                "execute",
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    guild_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    {subject_column} TEXT NOT NULL,
                    permission BOOLEAN NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                    PRIMARY KEY (guild_id, name, {subject_column})
                )
                """
            )
        logger.info(f"Ensured override tables in schema {self._schema}")
    
    # Lookups
    
    async def get_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId
    ) -> Optional[bool]:
        query = f"""
            SELECT permission FROM {self._member_table}
            WHERE guild_id = $1 AND name = $2 AND member_id = $3
        """
        return await self._run("fetchval", query, str(guild_id), full_name, str(member_id))
    
    async def get_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId
    ) -> Optional[bool]:
        query = f"""
            SELECT permission FROM {self._role_table}
            WHERE guild_id = $1 AND name = $2 AND role_id = $3
        """
        return await self._run("fetchval", query, str(guild_id), full_name, str(role_id))
    
    # Administration
    
    async def set_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId,
        value: bool
    ) -> None:
        query = f"""
            INSERT INTO {self._member_table} (guild_id, name, member_id, permission)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (guild_id, name, member_id)
            DO UPDATE SET permission = EXCLUDED.permission, updated_at = NOW()
        """
        await self._run("execute", query, str(guild_id), full_name, str(member_id), bool(value))
    
    async def set_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId,
        value: bool
    ) -> None:
        query = f"""
            INSERT INTO {self._role_table} (guild_id, name, role_id, permission)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (guild_id, name, role_id)
            DO UPDATE SET permission = EXCLUDED.permission, updated_at = NOW()
        """
        await self._run("execute", query, str(guild_id), full_name, str(role_id), bool(value))
    
    async def clear_member_override(
        self,
        guild_id: GuildId,
        full_name: str,
        member_id: MemberId
    ) -> bool:
        query = f"""
            DELETE FROM {self._member_table}
            WHERE guild_id = $1 AND name = $2 AND member_id = $3
        """
        status = await self._run("execute", query, str(guild_id), full_name, str(member_id))
        return self._deleted_count(status) > 0
    
    async def clear_role_override(
        self,
        guild_id: GuildId,
        full_name: str,
        role_id: RoleId
    ) -> bool:
        query = f"""
            DELETE FROM {self._role_table}
            WHERE guild_id = $1 AND name = $2 AND role_id = $3
        """
        status = await self._run("execute", query, str(guild_id), full_name, str(role_id))
        return self._deleted_count(status) > 0
    
    async def clear_node(self, guild_id: GuildId, full_name: str) -> int:
        removed = 0
        for table in (self._member_table, self._role_table):
            status = await self._run(
                "execute",
                f"DELETE FROM {table} WHERE guild_id = $1 AND name = $2",
                str(guild_id),
                full_name
            )
            removed += self._deleted_count(status)
        return removed
