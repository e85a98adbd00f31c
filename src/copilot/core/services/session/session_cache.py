"""Session cache reconciling the auth provider with the backend user record.

The cache serves the last known-good ``ApplicationUser`` from durable storage
while a fresh copy is fetched (stale-while-revalidate), keys every fetch by the
identity it was started for, and drops responses that arrive after the
identity changed.
"""

import asyncio

from loguru import logger

from src.copilot.core.models import (
    ApplicationUser,
    AuthState,
    ExternalIdentity,
    SessionSnapshot,
)
from src.copilot.core.services.auth_provider import AuthProvider
from src.copilot.core.services.navigation import Navigator
from src.copilot.core.services.profile_client import UserProfileClient
from src.copilot.core.storage.user_cache import UserCache
from src.copilot.runtime.config.config_data import SessionCacheConfig
from src.copilot.runtime.context import get_config


def cache_key_for(state: AuthState) -> str | None:
    """Fetch key for the given provider state; None while nothing should be fetched."""
    if not state.ready or state.identity is None:
        return None
    return f"user-{state.identity.id}"


class SessionCache:
    """Produces the ``SessionSnapshot`` the view renders from."""

    def __init__(
        self,
        auth: AuthProvider,
        profiles: UserProfileClient,
        cache: UserCache,
        navigator: Navigator,
        config: SessionCacheConfig | None = None,
    ) -> None:
        self._auth = auth
        self._profiles = profiles
        self._cache = cache
        self._navigator = navigator
        self._config = config or get_config().session

        self._fallback: ApplicationUser | None = cache.load()
        self._state = AuthState()
        self._current_key: str | None = None
        self._results: dict[str, ApplicationUser] = {}
        self._inflight: dict[str, asyncio.Task[ApplicationUser | None]] = {}

    @property
    def current_key(self) -> str | None:
        return self._current_key

    @property
    def snapshot(self) -> SessionSnapshot:
        state = self._state

        if not state.ready:
            # Provider still initializing: the cached copy is all we have
            return SessionSnapshot(user=self._fallback, is_loading=self._fallback is None)

        if state.identity is None:
            return SessionSnapshot(user=None, is_loading=False)

        key = self._current_key
        fresh = self._results.get(key) if key else None
        if fresh is not None:
            return SessionSnapshot(user=fresh, is_loading=False)

        fallback = self._fallback if self._fallback_matches(state.identity) else None
        in_flight = key is not None and key in self._inflight
        return SessionSnapshot(user=fallback, is_loading=in_flight and fallback is None)

    def _fallback_matches(self, identity: ExternalIdentity) -> bool:
        return self._fallback is not None and self._fallback.belongs_to(identity)

    async def sync(self) -> SessionSnapshot:
        """Re-read the provider state and revalidate if the identity key changed."""
        self._state = self._auth.get_state()
        key = cache_key_for(self._state)

        if key != self._current_key:
            logger.debug(f"Session key changed: {self._current_key} -> {key}")
            self._set_current_key(key)
            self._fetch_current()

        return self.snapshot

    async def revalidate(self) -> SessionSnapshot:
        """Fetch again for the current identity, joining a fetch already in flight."""
        self._state = self._auth.get_state()
        self._set_current_key(cache_key_for(self._state))
        self._fetch_current()
        return self.snapshot

    async def on_focus(self) -> SessionSnapshot:
        """Window regained focus."""
        if self._config.revalidate_on_focus:
            return await self.revalidate()
        return self.snapshot

    async def wait_for_revalidation(self) -> SessionSnapshot:
        """Wait for the current key's fetch, if one is in flight."""
        task = self._inflight.get(self._current_key) if self._current_key else None
        if task is not None:
            await asyncio.wait([task])
        return self.snapshot

    def _set_current_key(self, key: str | None) -> None:
        self._current_key = key
        # Only the current identity's fresh result is ever served
        self._results = {k: user for k, user in self._results.items() if k == key}

    def _fetch_current(self) -> None:
        identity = self._state.identity
        if self._current_key is not None and identity is not None:
            self._start_fetch(self._current_key, identity)

    def _start_fetch(
        self, key: str, identity: ExternalIdentity
    ) -> asyncio.Task[ApplicationUser | None]:
        task = self._inflight.get(key)
        if task is not None:
            return task

        task = asyncio.create_task(self._fetch(key, identity), name=f"session-fetch:{key}")
        self._inflight[key] = task
        return task

    async def _fetch(self, key: str, identity: ExternalIdentity) -> ApplicationUser | None:
        logger.info(f"Fetching user data from server for {key}")
        try:
            profile = await self._profiles.fetch_profile()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Keep whatever snapshot we had; a failed fetch must not log the user out
            logger.error(f"Error fetching user data for {key}: {e}")
            return None
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]

        if key != self._current_key:
            logger.info(f"Discarding stale user data for {key}, current key is {self._current_key}")
            return None

        user = ApplicationUser.merge(profile, identity)
        self._results[key] = user
        # Write through on every successful fetch, unchanged or not
        self._cache.save(user)
        return user

    async def logout(self) -> None:
        """Log out of the provider, clear the cached user, and land signed out.

        Cache clearing and navigation happen even when the provider call fails.
        """
        logger.info("Initiating user logout...")
        self._navigator.push(self._config.refresh_path)

        try:
            await self._auth.logout()
        except Exception as e:
            logger.error(f"Error during provider logout: {e}")
        finally:
            self._cache.clear()
            self._forget()
            logger.info("User logged out and cache cleared")
            self._navigator.replace(self._config.landing_path)

    def _forget(self) -> None:
        for task in self._inflight.values():
            task.cancel()
        self._inflight.clear()
        self._results.clear()
        self._fallback = None
        self._current_key = None
        self._state = AuthState(ready=self._state.ready, identity=None)

    async def close(self) -> None:
        """Cancel outstanding fetches; the cache is unusable afterwards."""
        tasks = list(self._inflight.values())
        for task in tasks:
            task.cancel()
        self._inflight.clear()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
