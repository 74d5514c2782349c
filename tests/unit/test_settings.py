"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from bot_permissions.config.constants import StoreBackend
from bot_permissions.config.settings import PermissionSettings, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run without a stray .env file and clear the settings cache."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestPermissionSettings:
    """Test PermissionSettings parsing and validation."""

    def test_defaults(self):
        settings = PermissionSettings()

        assert settings.store_backend == StoreBackend.MEMORY
        assert settings.database_schema == "public"
        assert settings.redis_key_prefix == "bot_permissions"
        assert settings.defaults_file is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("BOT_PERMISSIONS_STORE_BACKEND", "postgres")
        monkeypatch.setenv("BOT_PERMISSIONS_DATABASE_URL", "postgresql://bot@db/bot")
        monkeypatch.setenv("BOT_PERMISSIONS_DATABASE_POOL_MAX_SIZE", "4")

        settings = PermissionSettings()

        assert settings.store_backend == StoreBackend.POSTGRES
        assert settings.database_url == "postgresql://bot@db/bot"
        assert settings.database_pool_max_size == 4

    def test_reads_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("BOT_PERMISSIONS_REDIS_KEY_PREFIX=guilds\n", encoding="utf-8")

        assert PermissionSettings().redis_key_prefix == "guilds"

    @pytest.mark.parametrize("schema", ["bot-perms", "1bot", "bot;drop"])
    def test_invalid_schema_rejected(self, schema):
        with pytest.raises(ValidationError):
            PermissionSettings(database_schema=schema)

    @pytest.mark.parametrize("prefix", ["", "bot:perms"])
    def test_invalid_key_prefix_rejected(self, prefix):
        with pytest.raises(ValidationError):
            PermissionSettings(redis_key_prefix=prefix)

    def test_pool_sizes_must_be_ordered(self):
        with pytest.raises(ValidationError):
            PermissionSettings(database_pool_min_size=5, database_pool_max_size=2)

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            PermissionSettings(store_backend="mongo")

    def test_get_settings_is_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("BOT_PERMISSIONS_STORE_BACKEND", "redis")

        assert get_settings() is first

        get_settings.cache_clear()
        assert get_settings().store_backend == StoreBackend.REDIS
