"""Bounded polling loop confirming a purchase transaction."""

import asyncio

from loguru import logger

from src.copilot.core.exceptions import VerificationInProgressError
from src.copilot.core.models import VerificationAttempt, VerificationStatus
from src.copilot.core.services.notifications import NotificationSink
from src.copilot.core.services.transaction_oracle import TransactionOracle
from src.copilot.runtime.config.config_data import VerificationConfig
from src.copilot.runtime.context import get_config

SUCCESS_TITLE = "EAP Purchase Successful"
SUCCESS_DESCRIPTION = (
    "Your Early Access Program purchase has been verified. Please refresh the page."
)
TIMEOUT_TITLE = "Verification Timeout"
TIMEOUT_DESCRIPTION = "Please visit the FAQ page to manually verify your transaction."


class VerificationPoller:
    """Single-slot poller: Idle -> Pending -> (Succeeded | TimedOut) -> Idle.

    Each check is scheduled only after the previous one resolved, so at most
    one oracle call is outstanding and a slow oracle slows the loop down.
    Oracle errors spend the same attempt budget as negative answers.
    """

    def __init__(
        self,
        oracle: TransactionOracle,
        notifier: NotificationSink,
        config: VerificationConfig | None = None,
    ) -> None:
        self._oracle = oracle
        self._notifier = notifier
        self._config = config or get_config().verification
        self._attempt: VerificationAttempt | None = None
        self._last_attempt: VerificationAttempt | None = None
        self._task: asyncio.Task[VerificationAttempt] | None = None

    @property
    def status(self) -> VerificationStatus:
        if self._attempt is None:
            return VerificationStatus.IDLE
        return self._attempt.status

    @property
    def attempt(self) -> VerificationAttempt | None:
        """The pending attempt, if any."""
        return self._attempt

    @property
    def last_attempt(self) -> VerificationAttempt | None:
        """The most recently finished attempt."""
        return self._last_attempt

    def register(self, tx_hash: str) -> VerificationAttempt:
        """Start verifying ``tx_hash``. Must be called from a running event loop."""
        if self._attempt is not None:
            raise VerificationInProgressError(self._attempt.tx_hash)

        attempt = VerificationAttempt(tx_hash=tx_hash)
        self._attempt = attempt
        self._task = asyncio.create_task(self._run(attempt), name=f"verify:{tx_hash}")
        logger.info(
            f"Verifying transaction {tx_hash} "
            f"(every {self._config.poll_interval_ms}ms, up to {self._config.max_attempts} checks)"
        )
        return attempt

    async def _run(self, attempt: VerificationAttempt) -> VerificationAttempt:
        try:
            while attempt.attempt_count < self._config.max_attempts:
                await asyncio.sleep(self._config.poll_interval_seconds)
                attempt.attempt_count += 1

                if await self._check(attempt):
                    attempt.status = VerificationStatus.SUCCEEDED
                    self._notifier.notify_success(SUCCESS_TITLE, SUCCESS_DESCRIPTION)
                    logger.info(
                        f"Transaction {attempt.tx_hash} verified on check {attempt.attempt_count}"
                    )
                    return attempt

            attempt.status = VerificationStatus.TIMED_OUT
            self._notifier.notify_error(TIMEOUT_TITLE, TIMEOUT_DESCRIPTION)
            logger.warning(
                f"Transaction {attempt.tx_hash} not verified after {attempt.attempt_count} checks"
            )
            return attempt
        finally:
            self._finish(attempt)

    async def _check(self, attempt: VerificationAttempt) -> bool:
        try:
            result = await self._oracle.check(attempt.tx_hash)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(
                f"Verification error for {attempt.tx_hash} on check {attempt.attempt_count}: {e}"
            )
            return False

        logger.debug(
            f"Check {attempt.attempt_count} for {attempt.tx_hash}: "
            f"success={result.success} detail={result.detail}"
        )
        return result.success

    def _finish(self, attempt: VerificationAttempt) -> None:
        if self._attempt is attempt:
            self._attempt = None
            self._task = None
        if attempt.finished:
            self._last_attempt = attempt

    async def wait(self) -> VerificationAttempt | None:
        """Wait for the pending verification to finish.

        Returns the finished attempt, or None when nothing was pending or the
        verification was cancelled.
        """
        task = self._task
        if task is None:
            return self._last_attempt
        await asyncio.wait([task])
        if task.cancelled():
            return None
        return task.result()

    async def close(self) -> None:
        """Tear down: cancel the pending verification without notifying."""
        task = self._task
        if task is None:
            return
        logger.info(f"Cancelling verification of {self._attempt.tx_hash if self._attempt else '?'}")
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        self._attempt = None
        self._task = None
