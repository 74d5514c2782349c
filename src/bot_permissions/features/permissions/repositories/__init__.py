"""Permission repositories package.

Concrete override store implementations.
"""

from .memory_override_store import InMemoryOverrideStore
from .asyncpg_override_store import AsyncPGOverrideStore
from .redis_override_store import RedisOverrideStore
from .factory import create_override_store

__all__ = [
    "InMemoryOverrideStore",
    "AsyncPGOverrideStore",
    "RedisOverrideStore",
    "create_override_store",
]
