"""Application lifespan management.

Startup runs core services (logging, fatal handlers, metrics) and then
messaging; shutdown runs in reverse order.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from webhook_bridge.app.lifespan.core import shutdown_core, startup_core
from webhook_bridge.app.lifespan.messaging import (
    BrokerStartupError,
    shutdown_messaging,
    startup_messaging,
)
from webhook_bridge.core.settings import (
    get_app_settings,
    get_logging_settings,
    get_rabbit_settings,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _log_endpoints(host: str, port: int) -> None:
    display_host = "localhost" if host in {"0.0.0.0", "::"} else host
    base = f"http://{display_host}:{port}"
    logger.info(
        f"Webhook bridge listening on port {port}",
        extra={
            "webhook_url": f"{base}/webhook?exchange=NAME&token=TOKEN",
            "health_url": f"{base}/health",
            "debug_url": f"{base}/debug",
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    app_settings = get_app_settings()
    log_settings = get_logging_settings()
    rabbit_settings = get_rabbit_settings()

    await startup_core(app_settings, log_settings)
    app.state.broker = await startup_messaging(rabbit_settings)
    _log_endpoints(app_settings.host, app_settings.port)

    try:
        yield
    finally:
        logger.info("Shutting down")
        await shutdown_messaging()
        app.state.broker = None
        await shutdown_core()


__all__ = ["BrokerStartupError", "lifespan"]
