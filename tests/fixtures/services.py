"""Service fixtures for testing."""

from unittest.mock import Mock

import pytest

from src.copilot.core.models import ExternalIdentity
from src.copilot.core.services import (
    InMemoryAuthProvider,
    InMemoryNavigator,
    NotificationSink,
    SessionCache,
    VerificationPoller,
)
from src.copilot.core.storage import InMemoryDurableStore, UserCache
from src.copilot.runtime.config.config_data import SessionCacheConfig, VerificationConfig

from .dummies import GatedProfileClient, ScriptedOracle


@pytest.fixture
def durable_store() -> InMemoryDurableStore:
    return InMemoryDurableStore()


@pytest.fixture
def user_cache(durable_store: InMemoryDurableStore, cache_key: str) -> UserCache:
    return UserCache(durable_store, key=cache_key)


@pytest.fixture
def auth_provider(identity: ExternalIdentity) -> InMemoryAuthProvider:
    """Ready provider with ``identity`` signed in."""
    return InMemoryAuthProvider(identity=identity, ready=True)


@pytest.fixture
def navigator() -> InMemoryNavigator:
    return InMemoryNavigator(initial_path="/home")


@pytest.fixture
def gated_profiles() -> GatedProfileClient:
    return GatedProfileClient()


@pytest.fixture
def session_cache(
    auth_provider: InMemoryAuthProvider,
    gated_profiles: GatedProfileClient,
    user_cache: UserCache,
    navigator: InMemoryNavigator,
    session_config: SessionCacheConfig,
) -> SessionCache:
    return SessionCache(
        auth_provider, gated_profiles, user_cache, navigator, config=session_config
    )


@pytest.fixture
def notifier() -> Mock:
    """Get a mocked notification sink."""
    return Mock(spec=NotificationSink)


@pytest.fixture
def never_succeeds() -> ScriptedOracle:
    return ScriptedOracle([False])


@pytest.fixture
def poller(
    never_succeeds: ScriptedOracle, notifier: Mock, verification_config: VerificationConfig
) -> VerificationPoller:
    return VerificationPoller(never_succeeds, notifier, config=verification_config)
