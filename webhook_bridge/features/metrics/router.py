"""Prometheus metrics endpoint.

Endpoints:
    GET /metrics - Prometheus scrape endpoint

Metrics Exposed:
    HTTP Request Metrics:
        - http_requests_total - Request count by method, route, status
        - http_request_duration_seconds - Request latency histogram

    Webhook Metrics:
        - webhook_requests_total - Webhook requests by outcome
        - webhook_payload_bytes - Published envelope sizes

    RabbitMQ Metrics:
        - rabbitmq_messages_published_total - Messages published per exchange
        - rabbitmq_publish_duration_seconds - Publish latency including confirms
        - rabbitmq_exchange_declarations_total - Declare calls by result
        - rabbitmq_exchange_cache_hits_total - Assertions served from the cache
        - rabbitmq_exchange_cache_size - Exchanges confirmed on the current link
        - rabbitmq_connect_attempts_total - Connect attempts by result
        - rabbitmq_connected - Link state gauge
        - rabbitmq_reconnect_attempt - Consecutive failed attempts

Example Prometheus Configuration:
    ```yaml
    scrape_configs:
      - job_name: 'webhook-bridge'
        static_configs:
          - targets: ['localhost:3000']
        metrics_path: '/metrics'
        scrape_interval: 15s
    ```
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from webhook_bridge.infra.metrics.prometheus import REGISTRY

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose the bridge metrics in Prometheus text format."""
    data = generate_latest(REGISTRY)
    return Response(
        content=data,
        media_type=CONTENT_TYPE_LATEST,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
