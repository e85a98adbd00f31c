"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="copilot", description="Client application name")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class RedisConfig(BaseModel):
    """Redis configuration model."""

    enabled: bool = Field(default=False, description="Enable Redis durable store")
    url: str = Field(default="", description="Redis connection URL")
    password: str | None = Field(
        default=None, description="Password for Redis authentication"
    )
    socket_timeout: float = Field(default=2.0, description="Socket timeout in seconds")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the Redis connection string with password if provided."""
        if self.password:
            if "@" in self.url:
                # URL already has auth info
                return self.url
            parts = self.url.split("://", 1)
            if len(parts) == 2:
                scheme, rest = parts
                return f"{scheme}://:{self.password}@{rest}"
        return self.url

    @property
    def sanitized_connection_string(self) -> str:
        """Connection string safe for logging."""
        if self.password:
            return self.connection_string.replace(self.password, "***")
        return self.connection_string


class SessionCacheConfig(BaseModel):
    """Session cache configuration model."""

    cache_key: str = Field(
        default="copilot-user-data",
        description="Durable storage key holding the cached application user",
    )
    store: Literal["memory", "file", "redis"] = Field(
        default="memory", description="Durable store backend"
    )
    file_path: str = Field(
        default=".copilot/storage.json",
        description="Path of the JSON document used by the file store",
    )
    refresh_path: str = Field(
        default="/refresh", description="Interstitial route shown during logout"
    )
    landing_path: str = Field(default="/", description="Signed-out landing route")
    revalidate_on_focus: bool = Field(
        default=False, description="Revalidate when the window regains focus"
    )


class BackendConfig(BaseModel):
    """Application backend configuration model."""

    base_url: str = Field(
        default="http://localhost:3000", description="Backend base URL"
    )
    profile_path: str = Field(
        default="/api/user", description="Endpoint returning the current user profile"
    )
    purchase_check_path: str = Field(
        default="/api/eap/check",
        description="Endpoint verifying an early access purchase transaction",
    )
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout in seconds")


class VerificationConfig(BaseModel):
    """Transaction verification poller configuration model."""

    poll_interval_ms: int = Field(
        default=3000, ge=0, description="Delay between oracle checks in milliseconds"
    )
    max_attempts: int = Field(
        default=20, ge=1, description="Oracle checks allowed before timing out"
    )
    oracle: Literal["http", "solana"] = Field(
        default="http", description="Transaction oracle implementation"
    )
    solana_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com",
        description="Solana JSON-RPC endpoint",
    )
    commitment: Literal["confirmed", "finalized"] = Field(
        default="finalized",
        description="Commitment a signature must reach to count as successful",
    )

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval_ms / 1000


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    redis: RedisConfig = Field(
        default_factory=RedisConfig, description="Redis configuration"
    )
    session: SessionCacheConfig = Field(
        default_factory=SessionCacheConfig, description="Session cache configuration"
    )
    backend: BackendConfig = Field(
        default_factory=BackendConfig, description="Backend configuration"
    )
    verification: VerificationConfig = Field(
        default_factory=VerificationConfig,
        description="Transaction verification configuration",
    )
