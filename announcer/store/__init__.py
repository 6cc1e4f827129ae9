"""State store implementations."""

from announcer.store.base import ArchiveRecord, StateStore
from announcer.store.memory import InMemoryStore
from announcer.store.redis_store import RedisStore

__all__ = ["ArchiveRecord", "InMemoryStore", "RedisStore", "StateStore"]
