"""Prometheus metrics for the webhook bridge."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, Info

# Custom registry so tests and the /metrics endpoint see only our collectors
REGISTRY = CollectorRegistry()

# Covers response times from 1ms to 10s
DEFAULT_LATENCY_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
)

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

# Webhook pipeline metrics
webhook_requests_total = Counter(
    "webhook_requests_total",
    "Webhook requests by outcome",
    ["outcome"],
    registry=REGISTRY,
)

webhook_payload_bytes = Histogram(
    "webhook_payload_bytes",
    "Size of published webhook envelopes in bytes",
    buckets=(256, 1024, 10240, 102400, 1048576, 10485760),
    registry=REGISTRY,
)

# Broker metrics
rabbitmq_messages_published_total = Counter(
    "rabbitmq_messages_published_total",
    "Messages published to RabbitMQ",
    ["exchange"],
    registry=REGISTRY,
)

rabbitmq_publish_duration_seconds = Histogram(
    "rabbitmq_publish_duration_seconds",
    "Time spent publishing one message",
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

rabbitmq_exchange_declarations_total = Counter(
    "rabbitmq_exchange_declarations_total",
    "Exchange declare calls by result",
    ["result"],
    registry=REGISTRY,
)

rabbitmq_exchange_cache_hits_total = Counter(
    "rabbitmq_exchange_cache_hits_total",
    "Exchange assertions answered from the cache",
    registry=REGISTRY,
)

rabbitmq_exchange_cache_size = Gauge(
    "rabbitmq_exchange_cache_size",
    "Exchanges confirmed under the current broker link",
    registry=REGISTRY,
)

rabbitmq_connect_attempts_total = Counter(
    "rabbitmq_connect_attempts_total",
    "Broker connect attempts by result",
    ["result"],
    registry=REGISTRY,
)

rabbitmq_connected = Gauge(
    "rabbitmq_connected",
    "1 while a usable broker channel exists, 0 otherwise",
    registry=REGISTRY,
)

rabbitmq_reconnect_attempt = Gauge(
    "rabbitmq_reconnect_attempt",
    "Consecutive failed connect attempts since the last success",
    registry=REGISTRY,
)

# Application info
app_info = Info(
    "app",
    "Application information",
    registry=REGISTRY,
)
