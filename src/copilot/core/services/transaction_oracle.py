"""Oracles answering whether a submitted transaction succeeded."""

from abc import ABC, abstractmethod
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from src.copilot.core.exceptions import OracleError
from src.copilot.core.models import BackendResponse, OracleResult
from src.copilot.runtime.config.config_data import BackendConfig, VerificationConfig


class TransactionOracle(ABC):
    @abstractmethod
    async def check(self, tx_hash: str) -> OracleResult:
        """Report whether ``tx_hash`` reached success.

        A transaction the oracle has not seen yet is reported as
        ``success=False``, not as an error.

        Raises:
            OracleError: If the oracle could not be asked
        """
        raise NotImplementedError


class HttpTransactionOracle(TransactionOracle):
    """Asks the backend's purchase check action about a transaction."""

    def __init__(
        self,
        config: BackendConfig,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._headers = headers or {}
        self._transport = transport

    async def check(self, tx_hash: str) -> OracleResult:
        try:
            async with httpx.AsyncClient(
                base_url=self._config.base_url,
                headers=self._headers,
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self._config.purchase_check_path, json={"txHash": tx_hash}
                )
                response.raise_for_status()
                envelope = BackendResponse.model_validate(response.json())
        except httpx.HTTPError as e:
            raise OracleError(f"Purchase check request failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise OracleError(f"Malformed purchase check response: {e}") from e

        return OracleResult(success=envelope.success, detail=envelope.error)


class SolanaRpcOracle(TransactionOracle):
    """Reads signature status straight from a Solana JSON-RPC node.

    A signature counts as successful once it reaches the configured
    commitment without an execution error. Failed signatures never become
    successful, but they are still reported as ``success=False`` so the
    poller's budget decides when to give up.
    """

    _COMMITMENT_ORDER = {"processed": 0, "confirmed": 1, "finalized": 2}

    def __init__(
        self,
        config: VerificationConfig,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._timeout = timeout_seconds
        self._transport = transport
        self._request_id = 0

    def _payload(self, signature: str) -> dict[str, Any]:
        self._request_id += 1
        return {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": "getSignatureStatuses",
            "params": [[signature], {"searchTransactionHistory": True}],
        }

    async def check(self, tx_hash: str) -> OracleResult:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._config.solana_rpc_url, json=self._payload(tx_hash)
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            raise OracleError(f"Solana RPC request failed: {e}") from e
        except ValueError as e:
            raise OracleError(f"Malformed Solana RPC response: {e}") from e

        if body.get("error"):
            raise OracleError(f"Solana RPC error: {body['error']}")

        try:
            status = body["result"]["value"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise OracleError(f"Unexpected Solana RPC result: {body}") from e

        if status is None:
            return OracleResult(success=False, detail="not_found")

        if status.get("err") is not None:
            logger.warning(f"Transaction {tx_hash} failed on-chain: {status['err']}")
            return OracleResult(success=False, detail="failed")

        reached = status.get("confirmationStatus") or "processed"
        required = self._config.commitment
        success = self._COMMITMENT_ORDER.get(reached, 0) >= self._COMMITMENT_ORDER[required]
        return OracleResult(success=success, detail=reached)
