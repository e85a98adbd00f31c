"""Durable storage for the cached application user."""

from .durable_store import (
    DurableStore,
    FileDurableStore,
    InMemoryDurableStore,
    RedisDurableStore,
    get_durable_store,
)
from .user_cache import UserCache

__all__ = [
    "DurableStore",
    "FileDurableStore",
    "InMemoryDurableStore",
    "RedisDurableStore",
    "UserCache",
    "get_durable_store",
]
