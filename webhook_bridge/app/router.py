"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webhook_bridge.core.settings import get_app_settings
from webhook_bridge.features.metrics.router import router as metrics_router
from webhook_bridge.features.status.router import router as status_router
from webhook_bridge.features.webhooks.router import router as webhooks_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from webhook_bridge.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Every route lives at the root: ``/webhook``, ``/health``, ``/debug``
    and, when enabled, ``/metrics``.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override.
    """
    app_settings = app_settings or get_app_settings()

    app.include_router(webhooks_router)
    app.include_router(status_router)

    if app_settings.enable_metrics:
        app.include_router(metrics_router)

    logger.debug(
        "Routers registered",
        extra={"metrics_enabled": app_settings.enable_metrics},
    )
