"""Helper functions for tracking webhook and broker metrics."""

from __future__ import annotations

import logging

from webhook_bridge.infra.metrics import prometheus

logger = logging.getLogger(__name__)


# ============================================================================
# Webhook Tracking
# ============================================================================


def track_webhook(outcome: str) -> None:
    """Count one webhook request by outcome.

    Args:
        outcome: One of 'published', 'unauthorized', 'invalid',
            'unavailable', 'failed'.

    Example:
            track_webhook("published")
    """
    prometheus.webhook_requests_total.labels(outcome=outcome).inc()


def track_publish(exchange: str, size_bytes: int, duration: float) -> None:
    """Record a successful publish.

    Args:
        exchange: Target exchange name.
        size_bytes: Serialized envelope size.
        duration: Seconds spent in the publish call.
    """
    prometheus.rabbitmq_messages_published_total.labels(exchange=exchange).inc()
    prometheus.webhook_payload_bytes.observe(size_bytes)
    prometheus.rabbitmq_publish_duration_seconds.observe(duration)


# ============================================================================
# Broker Tracking
# ============================================================================


def track_exchange_declaration(result: str) -> None:
    """Count an exchange declare call ('success' or 'failure')."""
    prometheus.rabbitmq_exchange_declarations_total.labels(result=result).inc()


def track_exchange_cache_hit() -> None:
    """Count an exchange assertion served from the cache."""
    prometheus.rabbitmq_exchange_cache_hits_total.inc()


def track_connect_attempt(result: str, attempt: int) -> None:
    """Count a connect attempt and publish the current attempt counter.

    Args:
        result: 'success' or a ConnectFailureKind value.
        attempt: Attempt counter after the attempt finished.
    """
    prometheus.rabbitmq_connect_attempts_total.labels(result=result).inc()
    prometheus.rabbitmq_reconnect_attempt.set(attempt)


def update_link_state(connected: bool, cached_exchanges: int) -> None:
    """Mirror the broker link state into gauges."""
    prometheus.rabbitmq_connected.set(1 if connected else 0)
    prometheus.rabbitmq_exchange_cache_size.set(cached_exchanges)


# ============================================================================
# HTTP Tracking
# ============================================================================


def track_http_request(method: str, endpoint: str, status_code: int, duration: float) -> None:
    """Record one finished HTTP request.

    Args:
        method: HTTP method.
        endpoint: Route path template, or the raw path when no route matched.
        status_code: Response status.
        duration: Seconds from request start to response.
    """
    prometheus.http_requests_total.labels(
        method=method,
        endpoint=endpoint,
        status=str(status_code),
    ).inc()
    prometheus.http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
        duration,
    )


def set_app_info(service: str, version: str, environment: str) -> None:
    """Publish static application labels."""
    prometheus.app_info.info({"service": service, "version": version, "environment": environment})
    logger.debug("Application info metric set", extra={"service": service, "version": version})
