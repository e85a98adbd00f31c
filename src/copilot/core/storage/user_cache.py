"""Cached copy of the last known-good application user."""

from loguru import logger

from src.copilot.core.models import ApplicationUser
from src.copilot.core.storage.durable_store import DurableStore


class UserCache:
    """Single-slot cache entry over a durable store.

    Every storage or parse failure is logged and treated as a miss or a no-op;
    nothing raised by the store escapes.
    """

    def __init__(self, store: DurableStore, key: str = "copilot-user-data") -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> ApplicationUser | None:
        try:
            cached = self._store.get(self._key)
            if cached is None:
                logger.info("No user data found in cache")
                return None
            user = ApplicationUser.model_validate_json(cached)
            logger.info(f"Loaded user data from cache for identity {user.identity.id}")
            return user
        except Exception as e:
            logger.error(f"Failed to load cached user data: {e}")
            return None

    def save(self, user: ApplicationUser) -> None:
        try:
            self._store.set(self._key, user.model_dump_json())
            logger.debug(f"User data saved to cache for identity {user.identity.id}")
        except Exception as e:
            logger.error(f"Failed to update user cache: {e}")

    def clear(self) -> None:
        try:
            self._store.remove(self._key)
            logger.info("User data removed from cache")
        except Exception as e:
            logger.error(f"Failed to clear user cache: {e}")
