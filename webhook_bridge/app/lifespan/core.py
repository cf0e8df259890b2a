"""Core lifespan services: logging, fatal handlers and metrics.

These run first and have no dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webhook_bridge.core.fatal import install_fatal_handlers
from webhook_bridge.infra.logging.config import setup_logging
from webhook_bridge.infra.metrics import tracking

if TYPE_CHECKING:
    from webhook_bridge.core.settings.app import AppSettings
    from webhook_bridge.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)


async def startup_core(app_settings: AppSettings, log_settings: LoggingSettings) -> None:
    """Configure logging, make unhandled errors fatal and set the info metric.

    Args:
        app_settings: Application settings
        log_settings: Logging settings
    """
    setup_logging(log_settings=log_settings, force=True)
    install_fatal_handlers()
    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )

    if not app_settings.is_token_configured:
        logger.warning("AUTH_TOKEN is not set; every webhook request will be rejected with 401")

    if app_settings.enable_metrics:
        tracking.set_app_info(
            service=app_settings.service_name,
            version=app_settings.version,
            environment=app_settings.environment,
        )


async def shutdown_core() -> None:
    """Flush queued log records."""
    from webhook_bridge.infra.logging.config import complete

    logger.info("Application stopped")
    complete()
