"""Transaction verification models."""

from enum import StrEnum

from pydantic import BaseModel, Field


class VerificationStatus(StrEnum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"


class VerificationAttempt(BaseModel):
    """Ephemeral state of one verification; never persisted."""

    tx_hash: str = Field(description="Transaction hash or signature being verified")
    attempt_count: int = Field(default=0, ge=0, description="Oracle checks performed")
    status: VerificationStatus = Field(default=VerificationStatus.PENDING)

    @property
    def finished(self) -> bool:
        return self.status in (VerificationStatus.SUCCEEDED, VerificationStatus.TIMED_OUT)


class OracleResult(BaseModel):
    """Answer from a transaction oracle."""

    success: bool = Field(description="Transaction reached a successful terminal state")
    detail: str | None = Field(default=None, description="Oracle-specific status text")
