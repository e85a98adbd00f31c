"""Identity and user models shared by the session cache and its collaborators."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExternalIdentity(BaseModel):
    """Principal as known to the third-party authentication provider."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(description="Stable provider-side identifier")
    email: str | None = Field(default=None, description="Primary email, if linked")
    wallet_address: str | None = Field(
        default=None, description="Embedded or linked wallet address"
    )


class AuthState(BaseModel):
    """What the authentication provider reports at a given moment."""

    ready: bool = Field(default=False, description="Provider finished initializing")
    identity: ExternalIdentity | None = Field(
        default=None, description="Authenticated identity, None when logged out"
    )


class ProfileRecord(BaseModel):
    """Application user row as returned by the backend."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(description="Backend user identifier")
    external_id: str | None = Field(
        default=None,
        alias="privyId",
        description="Provider identifier the backend associated with this row",
    )
    early_access: bool = Field(
        default=False, alias="earlyAccess", description="Early access purchase verified"
    )
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class ApplicationUser(ProfileRecord):
    """Backend profile enriched with the provider identity it was fetched for.

    Only valid while ``identity.id`` matches the currently authenticated
    identity.
    """

    identity: ExternalIdentity = Field(description="Identity this record belongs to")

    @classmethod
    def merge(cls, profile: ProfileRecord, identity: ExternalIdentity) -> "ApplicationUser":
        data: dict[str, Any] = profile.model_dump(by_alias=True)
        data["identity"] = identity.model_dump()
        return cls.model_validate(data)

    def belongs_to(self, identity: ExternalIdentity | None) -> bool:
        return identity is not None and self.identity.id == identity.id


class SessionSnapshot(BaseModel):
    """The single state the view renders from."""

    user: ApplicationUser | None = None
    is_loading: bool = False


class BackendResponse(BaseModel):
    """Envelope returned by the backend's server actions."""

    success: bool = False
    data: dict[str, Any] | None = None
    error: str | None = None
