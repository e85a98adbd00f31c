from __future__ import annotations

import pytest

from src.copilot.core.models import ApplicationUser, ExternalIdentity, ProfileRecord
from src.copilot.runtime.config.config_data import (
    BackendConfig,
    SessionCacheConfig,
    VerificationConfig,
)

_CACHE_KEY = "copilot-user-data"


@pytest.fixture
def cache_key() -> str:
    return _CACHE_KEY


@pytest.fixture
def identity() -> ExternalIdentity:
    return ExternalIdentity(
        id="did:privy:alice", email="alice@example.com", wallet_address="AliceWa11et"
    )


@pytest.fixture
def other_identity() -> ExternalIdentity:
    return ExternalIdentity(id="did:privy:bob", email="bob@example.com")


@pytest.fixture
def profile() -> ProfileRecord:
    return ProfileRecord.model_validate(
        {
            "id": "user-1",
            "privyId": "did:privy:alice",
            "earlyAccess": True,
            "createdAt": "2025-01-01T00:00:00Z",
            "updatedAt": "2025-01-02T00:00:00Z",
            "degenMode": False,
        }
    )


@pytest.fixture
def other_profile() -> ProfileRecord:
    return ProfileRecord(id="user-2", external_id="did:privy:bob")


@pytest.fixture
def cached_user(profile: ProfileRecord, identity: ExternalIdentity) -> ApplicationUser:
    return ApplicationUser.merge(profile, identity)


@pytest.fixture
def session_config(cache_key: str) -> SessionCacheConfig:
    return SessionCacheConfig(cache_key=cache_key)


@pytest.fixture
def verification_config() -> VerificationConfig:
    return VerificationConfig(poll_interval_ms=0, max_attempts=20)


@pytest.fixture
def backend_config() -> BackendConfig:
    return BackendConfig(base_url="https://backend.test")
