"""Pytest configuration and fixtures for bot-permissions tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from bot_permissions.core.value_objects import GuildId, MemberId, RoleId
from bot_permissions.features.permissions.entities import (
    Member, Role, PermissionNode, PermissionGroup
)
from bot_permissions.features.permissions.repositories import InMemoryOverrideStore
from bot_permissions.features.permissions.services import PermissionRegistry


@pytest.fixture
def guild_id():
    """Sample guild ID for testing."""
    return GuildId(1000)


@pytest.fixture
def senior_role(guild_id):
    """Role with the higher position."""
    return Role(id=RoleId(10), guild_id=guild_id, position=10, name="moderator")


@pytest.fixture
def junior_role(guild_id):
    """Role with the lower position."""
    return Role(id=RoleId(5), guild_id=guild_id, position=5, name="dj")


@pytest.fixture
def member(guild_id, senior_role, junior_role):
    """Member carrying both roles, listed junior first."""
    return Member(id=MemberId(42), guild_id=guild_id, roles=[junior_role, senior_role])


@pytest.fixture
def bare_member(guild_id):
    """Member without roles."""
    return Member(id=MemberId(7), guild_id=guild_id)


@pytest.fixture
def store():
    """Empty in-memory override store."""
    return InMemoryOverrideStore()


@pytest.fixture
def registry(store):
    """Registry bound to the in-memory store."""
    return PermissionRegistry(store)


@pytest.fixture
def music_tree():
    """music -> (play, queue -> (add, clear)).

    Returned as a dict so tests keep strong references to every group; parent
    links are weak.
    """
    play = PermissionNode("play", default=True, description="Play a track")
    add = PermissionNode("add", default=True)
    clear = PermissionNode("clear", default=False, description="Clear the queue")
    queue = PermissionGroup("queue", [add, clear], description="Queue management")
    music = PermissionGroup("music", [play, queue], description="Music commands")
    return {"music": music, "play": play, "queue": queue, "add": add, "clear": clear}


@pytest.fixture
def registered_music(registry, music_tree):
    """The music tree registered with the registry."""
    registry.register_permission(music_tree["music"])
    return music_tree


@pytest.fixture
def mock_store():
    """Mock override store answering 'no override' everywhere."""
    mock = AsyncMock()
    mock.get_member_override.return_value = None
    mock.get_role_override.return_value = None
    return mock


@pytest.fixture
def mock_pool():
    """Mock asyncpg pool whose acquire() yields a mock connection."""
    conn = AsyncMock()
    pool = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    pool.acquire.return_value.__aexit__.return_value = False
    pool.close = AsyncMock()
    pool.connection = conn
    return pool


@pytest.fixture
def mock_redis():
    """Mock asyncio redis client."""
    return AsyncMock()
