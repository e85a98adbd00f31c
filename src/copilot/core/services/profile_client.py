"""Backend client for the application user profile."""

from abc import ABC, abstractmethod

import httpx
from loguru import logger
from pydantic import ValidationError

from src.copilot.core.exceptions import BackendFetchError
from src.copilot.core.models import BackendResponse, ProfileRecord
from src.copilot.runtime.config.config_data import BackendConfig


class UserProfileClient(ABC):
    @abstractmethod
    async def fetch_profile(self) -> ProfileRecord:
        """Fetch the profile of the user behind the current session.

        Raises:
            BackendFetchError: On transport failure or a failed response
        """
        raise NotImplementedError


class HttpUserProfileClient(UserProfileClient):
    """Calls the backend's user action over HTTP.

    The session is carried by whatever headers/cookies the caller configures,
    so the request itself carries no user id.
    """

    def __init__(
        self,
        config: BackendConfig,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._headers = headers or {}
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=self._headers,
            timeout=self._config.timeout_seconds,
            transport=self._transport,
        )

    async def fetch_profile(self) -> ProfileRecord:
        try:
            async with self._client() as client:
                response = await client.get(self._config.profile_path)
                response.raise_for_status()
                envelope = BackendResponse.model_validate(response.json())
        except httpx.HTTPError as e:
            raise BackendFetchError(f"User profile request failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise BackendFetchError(f"Malformed user profile response: {e}") from e

        if not envelope.success or not envelope.data:
            raise BackendFetchError(
                f"Server returned unsuccessful user data response: {envelope.error}"
            )

        try:
            profile = ProfileRecord.model_validate(envelope.data)
        except ValidationError as e:
            raise BackendFetchError(f"Malformed user profile: {e}") from e

        logger.debug(f"Retrieved profile {profile.id} from backend")
        return profile
