"""Logging infrastructure.

Provides structured logging with:
- JSONL format for Loki/Elasticsearch ingestion
- Automatic context injection (request_id, ...)
- QueueHandler + QueueListener for non-blocking I/O
- Per-handler log levels (console vs file)
- OpenTelemetry trace correlation

Basic usage:
    from webhook_bridge.infra.logging import set_log_context
    import logging

    logger = logging.getLogger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Processing request")  # Automatically includes request_id
"""

from webhook_bridge.infra.logging.config import (
    complete,
    configure_logging,
    setup_logging,
    shutdown,
)
from webhook_bridge.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from webhook_bridge.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "complete",
    "configure_logging",
    "get_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
