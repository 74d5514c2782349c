"""Tests for override store implementations."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError

from bot_permissions.config.constants import StoreBackend
from bot_permissions.config.settings import PermissionSettings
from bot_permissions.core.exceptions import ConfigurationError, InvalidSchemaError, StoreError
from bot_permissions.core.value_objects import GuildId, MemberId, RoleId
from bot_permissions.features.permissions.entities import (
    OverrideManager, OverrideStore, PermissionGroup, PermissionNode
)
from bot_permissions.features.permissions.repositories import (
    AsyncPGOverrideStore, InMemoryOverrideStore, RedisOverrideStore, create_override_store
)
from bot_permissions.features.permissions.services import PermissionRegistry


GUILD = GuildId(1)
MEMBER = MemberId(2)
ROLE = RoleId(3)


class TestInMemoryOverrideStore:
    """Test the dictionary-backed store."""

    def test_implements_protocols(self, store):
        assert isinstance(store, OverrideStore)
        assert isinstance(store, OverrideManager)

    @pytest.mark.asyncio
    async def test_missing_override_is_none(self, store):
        assert await store.get_member_override(GUILD, "music", MEMBER) is None
        assert await store.get_role_override(GUILD, "music", ROLE) is None

    @pytest.mark.asyncio
    async def test_set_and_clear(self, store):
        await store.set_member_override(GUILD, "music", MEMBER, False)
        await store.set_role_override(GUILD, "music", ROLE, True)

        assert await store.get_member_override(GUILD, "music", MEMBER) is False
        assert await store.get_role_override(GUILD, "music", ROLE) is True

        assert await store.clear_member_override(GUILD, "music", MEMBER) is True
        assert await store.clear_member_override(GUILD, "music", MEMBER) is False
        assert await store.get_member_override(GUILD, "music", MEMBER) is None

    @pytest.mark.asyncio
    async def test_keys_are_normalised(self, store):
        await store.set_member_override(GuildId("1"), "music", MemberId("2"), True)

        assert await store.get_member_override(GuildId(1), "music", MemberId(2)) is True

    @pytest.mark.asyncio
    async def test_guilds_are_independent(self, store):
        await store.set_role_override(GUILD, "music", ROLE, True)

        assert await store.get_role_override(GuildId(99), "music", ROLE) is None

    @pytest.mark.asyncio
    async def test_member_and_role_ids_do_not_collide(self, store):
        await store.set_member_override(GUILD, "music", MemberId(5), True)

        assert await store.get_role_override(GUILD, "music", RoleId(5)) is None

    @pytest.mark.asyncio
    async def test_clear_node(self, store):
        await store.set_member_override(GUILD, "music", MEMBER, True)
        await store.set_role_override(GUILD, "music", ROLE, True)
        await store.set_role_override(GUILD, "music.play", ROLE, True)
        await store.set_role_override(GuildId(9), "music", ROLE, True)

        assert await store.clear_node(GUILD, "music") == 2
        assert len(store) == 2


class TestAsyncPGOverrideStore:
    """Test the AsyncPG store against a mocked pool."""

    @pytest.fixture
    def pg_store(self, mock_pool):
        return AsyncPGOverrideStore(mock_pool, schema="bot", command_timeout=2.0)

    def test_rejects_unsafe_schema(self, mock_pool):
        with pytest.raises(InvalidSchemaError):
            AsyncPGOverrideStore(mock_pool, schema="bot; DROP TABLE x")

    @pytest.mark.asyncio
    async def test_get_member_override(self, pg_store, mock_pool):
        mock_pool.connection.fetchval.return_value = True

        assert await pg_store.get_member_override(GUILD, "music.play", MEMBER) is True

        query, *args = mock_pool.connection.fetchval.await_args.args
        assert "bot.member_permissions" in query
        assert args == ["1", "music.play", "2"]
        assert mock_pool.connection.fetchval.await_args.kwargs == {"timeout": 2.0}

    @pytest.mark.asyncio
    async def test_get_role_override_missing(self, pg_store, mock_pool):
        mock_pool.connection.fetchval.return_value = None

        assert await pg_store.get_role_override(GUILD, "music", ROLE) is None

        query = mock_pool.connection.fetchval.await_args.args[0]
        assert "bot.role_permissions" in query
        assert "role_id = $3" in query

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ConnectionRefusedError("connection refused"),
        asyncio.TimeoutError(),
        OSError("network unreachable"),
    ])
    async def test_driver_errors_become_store_errors(self, pg_store, mock_pool, error):
        mock_pool.connection.fetchval.side_effect = error

        with pytest.raises(StoreError) as exc_info:
            await pg_store.get_member_override(GUILD, "music", MEMBER)

        assert exc_info.value.__cause__ is error
        assert exc_info.value.details == {"schema": "bot"}

    @pytest.mark.asyncio
    async def test_set_member_override_upserts(self, pg_store, mock_pool):
        await pg_store.set_member_override(GUILD, "music", MEMBER, False)

        query, *args = mock_pool.connection.execute.await_args.args
        assert "ON CONFLICT (guild_id, name, member_id)" in query
        assert args == ["1", "music", "2", False]

    @pytest.mark.asyncio
    async def test_clear_role_override(self, pg_store, mock_pool):
        mock_pool.connection.execute.return_value = "DELETE 1"
        assert await pg_store.clear_role_override(GUILD, "music", ROLE) is True

        mock_pool.connection.execute.return_value = "DELETE 0"
        assert await pg_store.clear_role_override(GUILD, "music", ROLE) is False

    @pytest.mark.asyncio
    async def test_clear_node_counts_both_tables(self, pg_store, mock_pool):
        mock_pool.connection.execute.side_effect = ["DELETE 2", "DELETE 3"]

        assert await pg_store.clear_node(GUILD, "music") == 5
        assert mock_pool.connection.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_ensure_schema(self, pg_store, mock_pool):
        await pg_store.ensure_schema()

        statements = [c.args[0] for c in mock_pool.connection.execute.await_args_list]
        assert "CREATE SCHEMA IF NOT EXISTS bot" in statements[0]
        assert "bot.member_permissions" in statements[1]
        assert "bot.role_permissions" in statements[2]

    @pytest.mark.asyncio
    async def test_outage_aborts_check(self, pg_store, mock_pool, member):
        node = PermissionNode("play", default=True)
        group = PermissionGroup("music", [node])
        PermissionRegistry(pg_store).register_permission(group)
        mock_pool.connection.fetchval.side_effect = ConnectionResetError("reset by peer")

        with pytest.raises(StoreError):
            await node.check_full(member)


class TestRedisOverrideStore:
    """Test the Redis store against a mocked client."""

    @pytest.fixture
    def redis_store(self, mock_redis):
        return RedisOverrideStore(mock_redis, key_prefix="perms")

    @pytest.mark.asyncio
    async def test_get_member_override(self, redis_store, mock_redis):
        mock_redis.hget.return_value = b"1"

        assert await redis_store.get_member_override(GUILD, "music.play", MEMBER) is True
        mock_redis.hget.assert_awaited_once_with("perms:1:music.play:member", "2")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw,expected", [
        (b"0", False),
        ("false", False),
        ("1", True),
        (None, None),
    ])
    async def test_get_role_override_values(self, redis_store, mock_redis, raw, expected):
        mock_redis.hget.return_value = raw

        assert await redis_store.get_role_override(GUILD, "music", ROLE) is expected
        mock_redis.hget.assert_awaited_once_with("perms:1:music:role", "3")

    @pytest.mark.asyncio
    async def test_unreadable_value_is_store_error(self, redis_store, mock_redis):
        mock_redis.hget.return_value = b"maybe"

        with pytest.raises(StoreError):
            await redis_store.get_member_override(GUILD, "music", MEMBER)

    @pytest.mark.asyncio
    async def test_client_error_becomes_store_error(self, redis_store, mock_redis):
        error = RedisConnectionError("connection lost")
        mock_redis.hget.side_effect = error

        with pytest.raises(StoreError) as exc_info:
            await redis_store.get_role_override(GUILD, "music", ROLE)

        assert exc_info.value.__cause__ is error
        assert exc_info.value.details == {"key": "perms:1:music:role"}

    @pytest.mark.asyncio
    async def test_set_and_clear(self, redis_store, mock_redis):
        mock_redis.hdel.return_value = 1

        await redis_store.set_role_override(GUILD, "music", ROLE, False)
        assert await redis_store.clear_member_override(GUILD, "music", MEMBER) is True

        mock_redis.hset.assert_awaited_once_with("perms:1:music:role", "3", "0")
        mock_redis.hdel.assert_awaited_once_with("perms:1:music:member", "2")

    @pytest.fixture
    def mock_pipeline(self, mock_redis):
        pipe = MagicMock()
        pipe.__aenter__.return_value = pipe
        pipe.__aexit__.return_value = False
        pipe.execute = AsyncMock(side_effect=[[2, 1], [1, 1]])
        mock_redis.pipeline = MagicMock(return_value=pipe)
        return pipe

    @pytest.mark.asyncio
    async def test_clear_node_counts_and_deletes_atomically(self, redis_store, mock_redis, mock_pipeline):
        assert await redis_store.clear_node(GUILD, "music") == 3

        mock_redis.pipeline.assert_called_with(transaction=True)
        counted = [c.args[0] for c in mock_pipeline.hlen.call_args_list]
        deleted = [c.args[0] for c in mock_pipeline.delete.call_args_list]
        assert counted == ["perms:1:music:member", "perms:1:music:role"]
        assert deleted == counted
        mock_redis.hlen.assert_not_awaited()
        mock_redis.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_clear_node_failure_is_store_error(self, redis_store, mock_pipeline):
        mock_pipeline.execute.side_effect = RedisConnectionError("connection lost")

        with pytest.raises(StoreError):
            await redis_store.clear_node(GUILD, "music")


class TestCreateOverrideStore:
    """Test the settings-driven store factory."""

    @pytest.mark.asyncio
    async def test_memory_backend(self):
        settings = PermissionSettings(store_backend=StoreBackend.MEMORY)

        store = await create_override_store(settings)

        assert isinstance(store, InMemoryOverrideStore)

    @pytest.mark.asyncio
    async def test_postgres_requires_url(self):
        settings = PermissionSettings(store_backend=StoreBackend.POSTGRES, database_url=None)

        with pytest.raises(ConfigurationError):
            await create_override_store(settings)

    @pytest.mark.asyncio
    async def test_redis_requires_url(self):
        settings = PermissionSettings(store_backend=StoreBackend.REDIS, redis_url=None)

        with pytest.raises(ConfigurationError):
            await create_override_store(settings)

    @pytest.mark.asyncio
    async def test_postgres_backend(self, mock_pool):
        settings = PermissionSettings(
            store_backend=StoreBackend.POSTGRES,
            database_url="postgresql://bot@localhost/bot",
            database_schema="bot",
        )

        with patch(
            "bot_permissions.features.permissions.repositories.factory.asyncpg.create_pool",
            new=AsyncMock(return_value=mock_pool)
        ) as create_pool:
            store = await create_override_store(settings)

        assert isinstance(store, AsyncPGOverrideStore)
        assert create_pool.await_args.kwargs["dsn"] == "postgresql://bot@localhost/bot"
        assert mock_pool.connection.execute.await_count == 3
        mock_pool.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_postgres_pool_closed_when_schema_setup_fails(self, mock_pool):
        settings = PermissionSettings(
            store_backend=StoreBackend.POSTGRES,
            database_url="postgresql://bot@localhost/bot",
        )
        mock_pool.connection.execute.side_effect = OSError("permission denied for database")

        with patch(
            "bot_permissions.features.permissions.repositories.factory.asyncpg.create_pool",
            new=AsyncMock(return_value=mock_pool)
        ):
            with pytest.raises(StoreError):
                await create_override_store(settings)

        mock_pool.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_redis_backend(self, mock_redis):
        settings = PermissionSettings(
            store_backend=StoreBackend.REDIS,
            redis_url="redis://localhost:6379/0",
            redis_key_prefix="guildperms",
        )

        with patch(
            "bot_permissions.features.permissions.repositories.factory.redis.from_url",
            return_value=mock_redis
        ) as from_url:
            store = await create_override_store(settings)

        assert isinstance(store, RedisOverrideStore)
        assert from_url.call_args.args == ("redis://localhost:6379/0",)
