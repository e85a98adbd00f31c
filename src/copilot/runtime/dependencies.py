from dataclasses import dataclass

from src.copilot.core.services import (
    AuthProvider,
    HttpTransactionOracle,
    HttpUserProfileClient,
    InMemoryNavigator,
    LoggingNotificationSink,
    Navigator,
    NotificationSink,
    SessionCache,
    SolanaRpcOracle,
    TransactionOracle,
    UserProfileClient,
    VerificationPoller,
)
from src.copilot.core.storage import DurableStore, UserCache, get_durable_store
from src.copilot.runtime.config.config_data import ConfigData
from src.copilot.view.home import HomeController


@dataclass
class ClientDependencies:
    store: DurableStore
    user_cache: UserCache
    profile_client: UserProfileClient
    oracle: TransactionOracle
    notifier: NotificationSink
    navigator: Navigator
    session_cache: SessionCache
    poller: VerificationPoller

    def home_controller(self) -> HomeController:
        return HomeController(self.session_cache, self.poller)


def build_oracle(config: ConfigData) -> TransactionOracle:
    if config.verification.oracle == "solana":
        return SolanaRpcOracle(
            config.verification, timeout_seconds=config.backend.timeout_seconds
        )
    return HttpTransactionOracle(config.backend)


def build_dependencies(
    config: ConfigData,
    auth: AuthProvider,
    navigator: Navigator | None = None,
    notifier: NotificationSink | None = None,
    store: DurableStore | None = None,
) -> ClientDependencies:
    """Wire the client core from configuration.

    Anything passed explicitly replaces the configured default.
    """
    store = store or get_durable_store(config)
    user_cache = UserCache(store, key=config.session.cache_key)
    profile_client = HttpUserProfileClient(config.backend)
    oracle = build_oracle(config)
    notifier = notifier or LoggingNotificationSink()
    navigator = navigator or InMemoryNavigator()

    return ClientDependencies(
        store=store,
        user_cache=user_cache,
        profile_client=profile_client,
        oracle=oracle,
        notifier=notifier,
        navigator=navigator,
        session_cache=SessionCache(
            auth, profile_client, user_cache, navigator, config=config.session
        ),
        poller=VerificationPoller(oracle, notifier, config=config.verification),
    )
