"""Authentication provider capability.

The provider's login flow is opaque to the client core: all it needs is the
current ``AuthState`` and a way to log out.
"""

from abc import ABC, abstractmethod

from loguru import logger

from src.copilot.core.models import AuthState, ExternalIdentity


class AuthProvider(ABC):
    @abstractmethod
    def get_state(self) -> AuthState:
        """Return the provider's current readiness and identity."""
        raise NotImplementedError

    @abstractmethod
    async def logout(self) -> None:
        """End the provider session. May raise."""
        raise NotImplementedError


class InMemoryAuthProvider(AuthProvider):
    """Provider whose state is driven by the caller (tests, CLI)."""

    def __init__(
        self,
        identity: ExternalIdentity | None = None,
        ready: bool = True,
        logout_error: Exception | None = None,
    ) -> None:
        self._identity = identity
        self._ready = ready
        self._logout_error = logout_error
        self.logout_calls = 0

    def get_state(self) -> AuthState:
        return AuthState(ready=self._ready, identity=self._identity)

    def mark_ready(self) -> None:
        self._ready = True

    def sign_in(self, identity: ExternalIdentity) -> None:
        logger.debug(f"Provider signed in identity {identity.id}")
        self._identity = identity

    def sign_out(self) -> None:
        self._identity = None

    async def logout(self) -> None:
        self.logout_calls += 1
        if self._logout_error is not None:
            raise self._logout_error
        self.sign_out()
