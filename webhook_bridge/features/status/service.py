"""Status snapshots for the health and debug endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from webhook_bridge.features.status.schemas import (
    ConnectionInfo,
    DebugResponse,
    EnvironmentFlags,
    ExchangeCacheInfo,
    HealthResponse,
)
from webhook_bridge.features.webhooks.schemas import format_timestamp

if TYPE_CHECKING:
    from webhook_bridge.core.dependencies.messaging import BrokerGateway
    from webhook_bridge.core.settings.app import AppSettings
    from webhook_bridge.core.settings.rabbit import RabbitSettings


def build_health(broker: BrokerGateway | None, max_attempts: int) -> HealthResponse:
    """Health body; ``max_attempts`` is used while no manager exists yet."""
    if broker is None:
        return HealthResponse(
            rabbitmq="disconnected",
            reconnect_attempts=0,
            max_attempts=max_attempts,
            is_reconnecting=False,
            timestamp=format_timestamp(datetime.now(UTC)),
        )

    status = broker.status()
    return HealthResponse(
        rabbitmq="connected" if broker.is_available else "disconnected",
        reconnect_attempts=status.attempt_count,
        max_attempts=status.max_attempts,
        is_reconnecting=status.is_reconnecting,
        timestamp=format_timestamp(datetime.now(UTC)),
    )


def build_debug(
    broker: BrokerGateway | None,
    app_settings: AppSettings,
    rabbit_settings: RabbitSettings,
) -> DebugResponse:
    """Debug body. Only presence flags are derived from the settings."""
    environment = EnvironmentFlags(
        rabbitmq_url=rabbit_settings.url is not None,
        rabbitmq_vhost=rabbit_settings.vhost is not None,
        auth_token=app_settings.is_token_configured,
        max_reconnect_attempts="max_reconnect_attempts" in rabbit_settings.model_fields_set,
        port="port" in app_settings.model_fields_set,
    )

    if broker is None:
        connection = ConnectionInfo(
            state="disconnected",
            has_connection=False,
            has_channel=False,
            reconnect_attempts=0,
            max_attempts=rabbit_settings.max_reconnect_attempts,
            is_reconnecting=False,
            reconnect_pending=False,
        )
        cache = ExchangeCacheInfo(size=0)
    else:
        status = broker.status()
        connection = ConnectionInfo(
            state=status.state.value,
            has_connection=status.has_connection,
            has_channel=status.has_channel,
            reconnect_attempts=status.attempt_count,
            max_attempts=status.max_attempts,
            is_reconnecting=status.is_reconnecting,
            reconnect_pending=status.reconnect_pending,
        )
        cache = ExchangeCacheInfo(size=status.cache_size, exchanges=status.cached_exchanges)

    return DebugResponse(
        environment=environment,
        connection=connection,
        exchange_cache=cache,
        timestamp=format_timestamp(datetime.now(UTC)),
    )
