"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging

from webhook_bridge.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    get_log_context,
    set_log_context,
)


def make_record(msg: str = "Webhook published", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="webhook_bridge.features.webhooks.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test suite for JSONFormatter."""

    def test_single_line_json(self):
        """Test that records render as one JSON object with extras."""
        formatter = JSONFormatter(static={"service": "webhook-bridge"})

        line = formatter.format(make_record(exchange="orders", size_bytes=42))

        assert "\n" not in line
        data = json.loads(line)
        assert data["level"] == "INFO"
        assert data["message"] == "Webhook published"
        assert data["service"] == "webhook-bridge"
        assert data["exchange"] == "orders"
        assert data["size_bytes"] == 42
        assert data["timestamp"].endswith("Z")

    def test_unserializable_extra(self):
        """Test that odd extras are stringified instead of breaking the line."""
        line = JSONFormatter().format(make_record(payload=object()))

        assert json.loads(line)["payload"].startswith("<object object")


class TestLogContext:
    """Test suite for context injection."""

    def test_context_is_injected(self):
        """Test that the request ID reaches records without explicit extra."""
        set_log_context(request_id="req-1")
        try:
            record = make_record()
            assert ContextInjectingFilter().filter(record) is True
            assert record.request_id == "req-1"
        finally:
            clear_log_context()

        assert get_log_context() == {}

    def test_explicit_extra_wins(self):
        """Test that context never overwrites fields passed via extra."""
        set_log_context(request_id="req-1")
        try:
            record = make_record(request_id="explicit")
            ContextInjectingFilter().filter(record)
            assert record.request_id == "explicit"
        finally:
            clear_log_context()
