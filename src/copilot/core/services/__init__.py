"""Core services exports."""

# Collaborator capabilities
from .auth_provider import AuthProvider, InMemoryAuthProvider
from .navigation import InMemoryNavigator, Navigator
from .notifications import (
    ConsoleNotificationSink,
    LoggingNotificationSink,
    NotificationSink,
)

# Remote clients
from .profile_client import HttpUserProfileClient, UserProfileClient

# Session Services
from .session.session_cache import SessionCache
from .transaction_oracle import (
    HttpTransactionOracle,
    SolanaRpcOracle,
    TransactionOracle,
)

# Verification Services
from .verification.poller import VerificationPoller

__all__ = [
    # Collaborator capabilities
    "AuthProvider",
    "InMemoryAuthProvider",
    "Navigator",
    "InMemoryNavigator",
    "NotificationSink",
    "LoggingNotificationSink",
    "ConsoleNotificationSink",
    # Remote clients
    "UserProfileClient",
    "HttpUserProfileClient",
    "TransactionOracle",
    "HttpTransactionOracle",
    "SolanaRpcOracle",
    # Session Services
    "SessionCache",
    # Verification Services
    "VerificationPoller",
]
