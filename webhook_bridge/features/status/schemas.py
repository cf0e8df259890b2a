"""Status endpoint response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(_CamelModel):
    """Liveness plus broker link state.

    Always ``200`` with ``status: "ok"`` while the process runs; the broker
    state is reported, not enforced.

    Example:
        ```json
        {
            "status": "ok",
            "rabbitmq": "connected",
            "reconnectAttempts": 0,
            "maxAttempts": 10,
            "isReconnecting": false,
            "timestamp": "2025-01-01T00:00:00.000Z"
        }
        ```
    """

    status: Literal["ok"] = "ok"
    rabbitmq: Literal["connected", "disconnected"]
    reconnect_attempts: int = Field(alias="reconnectAttempts")
    max_attempts: int = Field(alias="maxAttempts")
    is_reconnecting: bool = Field(alias="isReconnecting")
    timestamp: str


class EnvironmentFlags(_CamelModel):
    """Which configuration values are present. Never the values themselves."""

    rabbitmq_url: bool = Field(alias="RABBITMQ_URL")
    rabbitmq_vhost: bool = Field(alias="RABBITMQ_VHOST")
    auth_token: bool = Field(alias="AUTH_TOKEN")
    max_reconnect_attempts: bool = Field(alias="MAX_RECONNECT_ATTEMPTS")
    port: bool = Field(alias="PORT")


class ConnectionInfo(_CamelModel):
    state: str
    has_connection: bool = Field(alias="hasConnection")
    has_channel: bool = Field(alias="hasChannel")
    reconnect_attempts: int = Field(alias="reconnectAttempts")
    max_attempts: int = Field(alias="maxAttempts")
    is_reconnecting: bool = Field(alias="isReconnecting")
    reconnect_pending: bool = Field(alias="reconnectPending")


class ExchangeCacheInfo(_CamelModel):
    size: int
    exchanges: list[str] = Field(default_factory=list)


class DebugResponse(_CamelModel):
    """Diagnostic snapshot of configuration presence, link and cache."""

    environment: EnvironmentFlags
    connection: ConnectionInfo
    exchange_cache: ExchangeCacheInfo = Field(alias="exchangeCache")
    timestamp: str
