"""Durable key-value store interface and implementations.

The store is the client's equivalent of browser local storage: synchronous,
string-valued, and allowed to fail. Callers that must never fail wrap it
(see ``UserCache``).
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from src.copilot.core.exceptions import StorageError
from src.copilot.runtime.config.config_data import ConfigData


class DurableStore(ABC):
    """Abstract interface for durable storage backends."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Read a value.

        Args:
            key: Entry key

        Returns:
            Stored string or None if absent
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Write a value, replacing any previous one.

        Args:
            key: Entry key
            value: Serialized value
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a value. Removing a missing key is a no-op.

        Args:
            key: Entry key
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the backend is healthy."""
        pass


class InMemoryDurableStore(DurableStore):
    """Process-local store; survives nothing but is always available."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def is_available(self) -> bool:
        return True


class FileDurableStore(DurableStore):
    """JSON document on disk holding every key, rewritten on each change."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"File store read failed: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"File store {self._path} does not hold a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"File store write failed: {e}") from e

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def is_available(self) -> bool:
        try:
            self._read_all()
            return True
        except StorageError:
            return False


class RedisDurableStore(DurableStore):
    """Redis-backed store using the synchronous client."""

    def __init__(self, redis_client):
        self._redis = redis_client
        self._available = True

    def get(self, key: str) -> str | None:
        try:
            data = self._redis.get(key)
            self._available = True
        except Exception as e:
            self._available = False
            raise StorageError(f"Redis get failed: {e}") from e

        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return data

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(key, value)
            self._available = True
        except Exception as e:
            self._available = False
            raise StorageError(f"Redis set failed: {e}") from e

    def remove(self, key: str) -> None:
        try:
            self._redis.delete(key)
            self._available = True
        except Exception as e:
            self._available = False
            raise StorageError(f"Redis delete failed: {e}") from e

    def is_available(self) -> bool:
        return self._available

    def ping(self) -> bool:
        """Test Redis connection health."""
        try:
            self._redis.ping()
            self._available = True
            return True
        except Exception:
            self._available = False
            return False


def _connect_redis(config: ConfigData) -> DurableStore:
    """Attempt to create a Redis store, fall back to in-memory."""
    try:
        import redis

        if not config.redis.enabled or not config.redis.url:
            raise RuntimeError("Redis not configured")

        redis_client = redis.Redis.from_url(
            config.redis.connection_string,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=config.redis.socket_timeout,
            socket_timeout=config.redis.socket_timeout,
        )

        redis_store = RedisDurableStore(redis_client)
        if redis_store.ping():
            logger.info(
                "Durable store: Redis connected ({})",
                config.redis.sanitized_connection_string,
            )
            return redis_store
        raise RuntimeError("Redis ping failed")

    except Exception as e:
        logger.warning(f"Redis unavailable ({e}), using in-memory durable store")
        return InMemoryDurableStore()


def get_durable_store(config: ConfigData) -> DurableStore:
    """Build the durable store selected by ``session.store``."""
    backend = config.session.store
    if backend == "redis":
        return _connect_redis(config)
    if backend == "file":
        logger.info(f"Durable store: file {config.session.file_path}")
        return FileDurableStore(config.session.file_path)
    return InMemoryDurableStore()
