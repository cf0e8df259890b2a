"""Application settings for the FastAPI webhook service."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(BaseSettings):
    """FastAPI application settings.

    Environment variables use APP_ prefix.
    Example: APP_DEBUG=true, APP_PORT=3000

    The listening port and the webhook secret are also read from the bare
    PORT and AUTH_TOKEN variables; the prefixed names take precedence.
    """

    # Service identity
    service_name: str = Field(
        default="webhook-bridge",
        min_length=1,
        max_length=100,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Service name for logging/tracing (lowercase, hyphens allowed)",
    )
    title: str = Field(
        default="Webhook Bridge",
        min_length=1,
        max_length=200,
        description="API title displayed in documentation",
    )
    description: str = Field(
        default="Receives webhooks and republishes them onto RabbitMQ fanout exchanges",
        description="API description (supports Markdown)",
    )
    version: str = Field(
        default="1.0.0",
        min_length=1,
        max_length=50,
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$",
        description="API version (semver format)",
    )
    environment: Environment = Field(
        default="development", description="Environment: development|staging|production|test",
    )

    # FastAPI toggles
    debug: bool = Field(default=False, description="Enable debug mode")
    docs_enabled: bool = Field(default=True, description="Serve /docs and /openapi.json")

    # Server configuration
    host: str = Field(
        default="0.0.0.0", min_length=1, max_length=255, description="Server bind host",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("APP_PORT", "PORT"),
        description="Server port",
    )

    # Webhook authentication
    auth_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("APP_AUTH_TOKEN", "AUTH_TOKEN"),
        description="Shared secret expected in the webhook `token` query parameter",
    )

    # Observability
    enable_metrics: bool = Field(
        default=True, description="Expose Prometheus metrics at /metrics",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_token_configured(self) -> bool:
        """Check whether a non-empty webhook secret is configured."""
        return self.auth_token is not None and bool(self.auth_token.get_secret_value())

    def get_docs_url(self) -> str | None:
        """Get Swagger UI URL, or None when docs are disabled."""
        return "/docs" if self.docs_enabled else None

    def get_openapi_url(self) -> str | None:
        """Get OpenAPI schema URL, or None when docs are disabled."""
        return "/openapi.json" if self.docs_enabled else None
