"""Models for the session cache and verification poller."""

from .user import (
    ApplicationUser,
    AuthState,
    BackendResponse,
    ExternalIdentity,
    ProfileRecord,
    SessionSnapshot,
)
from .verification import OracleResult, VerificationAttempt, VerificationStatus

__all__ = [
    "ApplicationUser",
    "AuthState",
    "BackendResponse",
    "ExternalIdentity",
    "OracleResult",
    "ProfileRecord",
    "SessionSnapshot",
    "VerificationAttempt",
    "VerificationStatus",
]
