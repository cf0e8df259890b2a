"""Unit tests for the webhook envelope and request decoding helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from starlette.datastructures import Headers, QueryParams

from webhook_bridge.core.exceptions import ValidationFailure
from webhook_bridge.features.webhooks.schemas import WebhookEnvelope, format_timestamp
from webhook_bridge.features.webhooks.service import (
    collect_headers,
    collect_params,
    parse_body,
    validate_exchange_name,
)


class TestFormatTimestamp:
    """Test suite for envelope timestamps."""

    def test_milliseconds_and_z_suffix(self):
        """Test that timestamps carry exactly three fractional digits and Z."""
        moment = datetime(2025, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)

        assert format_timestamp(moment) == "2025-01-02T03:04:05.678Z"

    def test_converts_to_utc(self):
        """Test that offsets are normalized to UTC."""
        moment = datetime(2025, 1, 2, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))

        assert format_timestamp(moment) == "2025-01-02T03:00:00.000Z"


class TestWebhookEnvelope:
    """Test suite for the wire form."""

    @pytest.fixture
    def envelope(self) -> WebhookEnvelope:
        return WebhookEnvelope(
            timestamp="2025-01-01T00:00:00.000Z",
            method="POST",
            params={"source": "github", "tag": ["a", "b"]},
            body={"nested": {"items": [1, 2, None]}},
            headers={"content-type": "application/json"},
            client_address="203.0.113.7",
            path="/webhook",
            original_url="/webhook?exchange=events&source=github&tag=a&tag=b",
        )

    def test_wire_keys(self, envelope):
        """Test that the wire form uses the published key names in order."""
        data = envelope.model_dump(by_alias=True)

        assert list(data) == [
            "timestamp",
            "method",
            "params",
            "body",
            "headers",
            "ip",
            "path",
            "originalUrl",
        ]

    def test_compact_json(self, envelope):
        """Test that the serialized form has no insignificant whitespace."""
        assert envelope.to_bytes().startswith(b'{"timestamp":"2025-01-01T00:00:00.000Z","method"')

    def test_parse_back(self, envelope):
        """Test that consumers can rebuild the envelope from the wire bytes."""
        assert WebhookEnvelope.from_bytes(envelope.to_bytes()) == envelope

    def test_minimal_envelope(self):
        """Test that an empty request still produces a complete envelope."""
        envelope = WebhookEnvelope(
            timestamp="2025-01-01T00:00:00.000Z",
            method="GET",
            path="/webhook",
            original_url="/webhook",
        )

        data = envelope.model_dump(by_alias=True)
        assert data["params"] == {}
        assert data["body"] == {}
        assert data["headers"] == {}
        assert data["ip"] is None
        assert WebhookEnvelope.from_bytes(envelope.to_bytes()) == envelope


class TestCollectors:
    """Test suite for query and header collection."""

    def test_params_drop_control_keys(self):
        """Test that token and exchange never reach consumers."""
        params = collect_params(QueryParams("token=s&exchange=e&a=1&b=2&a=3"))

        assert params == {"a": ["1", "3"], "b": "2"}

    def test_headers_lower_cased_and_joined(self):
        """Test that header names are lower-cased and repeats are joined."""
        headers = Headers(raw=[(b"X-Trace", b"one"), (b"x-trace", b"two"), (b"Host", b"test")])

        assert collect_headers(headers) == {"x-trace": "one, two", "host": "test"}


class TestParseBody:
    """Test suite for body decoding."""

    @pytest.mark.parametrize("content_type", [None, "application/json", "text/plain"])
    def test_empty_body(self, content_type):
        """Test that an empty body is published as an empty object."""
        assert parse_body(b"", content_type) == {}

    def test_json_with_charset(self):
        """Test that media type parameters are ignored."""
        assert parse_body(b'{"a":1}', "application/json; charset=utf-8") == {"a": 1}

    def test_vendor_json(self):
        """Test that structured +json media types are parsed."""
        assert parse_body(b"[1,2]", "application/vnd.api+json") == [1, 2]

    def test_invalid_json(self):
        """Test that malformed JSON is a validation failure."""
        with pytest.raises(ValidationFailure) as exc_info:
            parse_body(b"{oops", "application/json")

        assert exc_info.value.status_code == 400

    def test_form(self):
        """Test that form fields keep blank values."""
        assert parse_body(b"a=1&b=", "application/x-www-form-urlencoded") == {"a": "1", "b": ""}

    def test_text(self):
        """Test that unknown media types are decoded as text."""
        assert parse_body("héllo".encode(), "text/plain") == "héllo"


class TestValidateExchangeName:
    """Test suite for exchange name validation."""

    def test_accepts_regular_name(self):
        """Test that ordinary names pass through."""
        assert validate_exchange_name("orders.created") == "orders.created"

    @pytest.mark.parametrize("name", [None, "", "amq.topic", "x" * 256])
    def test_rejects(self, name):
        """Test that missing, reserved and oversized names are refused."""
        with pytest.raises(ValidationFailure):
            validate_exchange_name(name)
