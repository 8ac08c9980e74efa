"""Configuration for the Portal API Client.

Uses Pydantic settings for environment-based configuration. The settings
instance is created once at import time, so the backend base URL is fixed for
the lifetime of the process.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PortalClientSettings(BaseSettings):
    """Configuration settings for the Portal API Client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PORTAL_API_CLIENT_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Service identity
    SERVICE_NAME: str = "portal-api-client"

    ENVIRONMENT: str = Field(
        default="development",
        validation_alias=AliasChoices("PORTAL_API_CLIENT_ENVIRONMENT", "ENVIRONMENT"),
        description="Runtime environment for the client",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Backend REST API
    API_URL: str = Field(
        default="http://localhost:3001",
        description="Base URL of the maintenance REST backend",
        validation_alias=AliasChoices("PORTAL_API_CLIENT_API_URL", "NEXT_PUBLIC_API_URL"),
    )

    # Authentication
    TOKEN_STORAGE_KEY: str = Field(
        default="token", description="Key under which the bearer token is stored"
    )
    PROTECTED_PATH_PREFIX: str = Field(
        default="/api",
        description="Path prefix whose write calls require a stored token",
    )
    PUBLIC_PATH_MARKER: str = Field(
        default="line-oa",
        description="Substring that exempts a protected path from the token check",
    )
    UNAUTHORIZED_MESSAGE: str = Field(
        default="คุณต้องเข้าสู่ระบบก่อนทำรายการ",
        description="Message carried by the locally built 401 response",
    )

    # HTTP client configuration; None disables the timeout
    HTTP_CLIENT_TIMEOUT_SECONDS: float | None = Field(
        default=None,
        description="HTTP client request timeout in seconds",
    )


# Global settings instance
settings = PortalClientSettings()
