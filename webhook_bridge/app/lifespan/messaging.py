"""RabbitMQ connection manager lifespan management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webhook_bridge.infra.messaging.connection import (
    ConnectionManager,
    get_connection_manager,
    set_connection_manager,
)
from webhook_bridge.infra.messaging.diagnostics import mask_url

if TYPE_CHECKING:
    from webhook_bridge.core.settings.rabbit import RabbitSettings

logger = logging.getLogger(__name__)


class BrokerStartupError(RuntimeError):
    """RabbitMQ is required at startup but could not be reached."""


async def startup_messaging(rabbit_settings: RabbitSettings) -> ConnectionManager:
    """Create the connection manager and attempt the first connect.

    A failed first connect arms the reconnect loop and the service keeps
    answering in degraded mode (``/health`` reports ``disconnected``,
    ``/webhook`` answers 503), unless ``startup_require_rabbit`` is set.

    Args:
        rabbit_settings: RabbitMQ settings

    Raises:
        BrokerStartupError: First connect failed and RabbitMQ is required.
    """
    manager = ConnectionManager.from_settings(rabbit_settings)
    set_connection_manager(manager)

    if not rabbit_settings.is_configured:
        logger.error("RABBITMQ_URL is not set; webhooks cannot be published until it is")

    logger.info(
        "Initializing RabbitMQ connection",
        extra={
            "url": mask_url(rabbit_settings.url),
            "vhost": rabbit_settings.vhost,
            "max_reconnect_attempts": rabbit_settings.max_reconnect_attempts,
            "reconnect_interval": rabbit_settings.reconnect_interval,
        },
    )

    if await manager.connect():
        return manager

    if rabbit_settings.startup_require_rabbit:
        logger.error(
            "RabbitMQ required but unavailable, failing startup",
            extra={"startup_require_rabbit": True},
        )
        await manager.shutdown()
        set_connection_manager(None)
        msg = "RabbitMQ is unavailable and startup_require_rabbit is enabled"
        raise BrokerStartupError(msg)

    logger.warning(
        "RabbitMQ unavailable, continuing in degraded mode",
        extra={"startup_require_rabbit": False},
    )
    manager.schedule_reconnect()
    return manager


async def shutdown_messaging() -> None:
    """Stop reconnecting and close the broker link."""
    manager = get_connection_manager()
    if manager is None:
        return
    await manager.shutdown()
    set_connection_manager(None)
    logger.info("RabbitMQ connection manager stopped")
