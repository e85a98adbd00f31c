"""Exceptions raised by the client core and its collaborators."""


class CopilotError(Exception):
    """Base exception for the client core."""


class StorageError(CopilotError):
    """A durable store could not read, write, or remove an entry."""


class BackendFetchError(CopilotError):
    """The backend profile could not be fetched or reported failure."""


class OracleError(CopilotError):
    """A transaction oracle call failed before producing an answer."""


class VerificationInProgressError(CopilotError):
    """A verification is already pending in the single attempt slot."""

    def __init__(self, tx_hash: str):
        self.tx_hash = tx_hash
        super().__init__(f"Verification already pending for {tx_hash}")
