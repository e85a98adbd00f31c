"""Home view controller: the one place the session cache and the poller meet."""

from dataclasses import dataclass

from src.copilot.core.models import ApplicationUser, VerificationAttempt
from src.copilot.core.services import SessionCache, VerificationPoller


@dataclass
class HomeViewState:
    show_spinner: bool
    user: ApplicationUser | None

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user else None


class HomeController:
    def __init__(self, session: SessionCache, poller: VerificationPoller) -> None:
        self._session = session
        self._poller = poller

    async def load(self) -> HomeViewState:
        snapshot = await self._session.sync()
        return HomeViewState(show_spinner=snapshot.is_loading, user=snapshot.user)

    def register_verification(self, tx_hash: str) -> VerificationAttempt:
        """Called after a purchase was submitted."""
        return self._poller.register(tx_hash)

    async def logout(self) -> None:
        await self._session.logout()

    async def close(self) -> None:
        """View torn down (navigated away)."""
        await self._poller.close()
        await self._session.close()
