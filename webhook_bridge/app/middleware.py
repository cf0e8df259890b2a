"""Middleware configuration for FastAPI application."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING
import uuid

from starlette.middleware.base import BaseHTTPMiddleware

from webhook_bridge.core.settings import get_app_settings, get_logging_settings
from webhook_bridge.infra.logging.context import clear_log_context, set_log_context
from webhook_bridge.infra.metrics import tracking

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI, Request, Response
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add request ID to all requests and bind it to the logging context."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process request and add request ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with X-Request-ID header.
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        set_log_context(request_id=request_id)

        try:
            response = await call_next(request)
        finally:
            clear_log_context()
        response.headers["X-Request-ID"] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Add timing information to responses and record HTTP metrics."""

    def __init__(self, app: ASGIApp, slow_threshold: float | None = None) -> None:
        super().__init__(app)
        self.slow_threshold = slow_threshold

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process request and add timing.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with X-Process-Time header.
        """
        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Process-Time"] = f"{time.perf_counter() - start_time:.6f}"
            return response
        finally:
            duration = time.perf_counter() - start_time
            # Route template keeps label cardinality low
            route = request.scope.get("route")
            endpoint = getattr(route, "path", None) or request.url.path
            tracking.track_http_request(request.method, endpoint, status_code, duration)
            if self.slow_threshold is not None and duration > self.slow_threshold:
                logger.warning(
                    "Slow request",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": status_code,
                        "duration_seconds": round(duration, 4),
                    },
                )


def configure_middleware(app: FastAPI) -> None:
    """Configure middleware for the application.

    Starlette runs the last added middleware first, so the request ID is
    bound before timing starts.

    Args:
        app: FastAPI application instance.
    """
    app_settings = get_app_settings()
    log_settings = get_logging_settings()

    if app_settings.enable_metrics or log_settings.log_slow_requests:
        threshold = log_settings.slow_request_threshold if log_settings.log_slow_requests else None
        app.add_middleware(TimingMiddleware, slow_threshold=threshold)

    if log_settings.include_request_id:
        app.add_middleware(RequestIDMiddleware)

    logger.debug(
        "Middleware configured",
        extra={
            "request_id": log_settings.include_request_id,
            "timing": app_settings.enable_metrics or log_settings.log_slow_requests,
        },
    )
