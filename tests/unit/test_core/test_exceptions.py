"""Unit tests for application exceptions."""

from __future__ import annotations

from webhook_bridge.core.exceptions import (
    AppException,
    AuthenticationFailure,
    BrokerUnavailable,
    ConnectFailure,
    ConnectFailureKind,
    ExchangeAssertionFailure,
    PublishFailure,
    ValidationFailure,
)


class TestAppExceptions:
    """Test suite for the HTTP-facing exception hierarchy."""

    def test_authentication_failure(self):
        """Test that authentication failures map to 401."""
        exc = AuthenticationFailure()

        assert isinstance(exc, AppException)
        assert exc.status_code == 401
        assert exc.extra == {}

    def test_validation_failure(self):
        """Test that validation failures map to 400 and keep their context."""
        exc = ValidationFailure("bad", extra={"parameter": "exchange"})

        assert exc.status_code == 400
        assert exc.detail == "bad"
        assert exc.extra == {"parameter": "exchange"}

    def test_broker_unavailable_carries_counters(self):
        """Test that 503 bodies expose the reconnect counters."""
        exc = BrokerUnavailable(reconnect_attempt=2, max_attempts=10)

        assert exc.status_code == 503
        assert exc.extra == {"reconnectAttempt": 2, "maxAttempts": 10}

    def test_exchange_assertion_failure(self):
        """Test that assertion failures name the exchange and keep the reason."""
        exc = ExchangeAssertionFailure("orders", "PRECONDITION_FAILED")

        assert exc.status_code == 500
        assert exc.detail == "Failed to ensure exchange 'orders'"
        assert exc.extra == {"details": "PRECONDITION_FAILED"}

    def test_publish_failure(self):
        """Test that publish failures use the generic processing message."""
        exc = PublishFailure("orders", "channel closed")

        assert exc.status_code == 500
        assert exc.detail == "Failed to process webhook"
        assert exc.exchange == "orders"
        assert exc.extra == {"details": "channel closed"}


class TestConnectFailure:
    """Test suite for connect diagnostics."""

    def test_message_includes_kind(self):
        """Test that the string form starts with the kind."""
        exc = ConnectFailure(ConnectFailureKind.ACCESS_DENIED, "ACCESS_REFUSED")

        assert str(exc) == "access_denied: ACCESS_REFUSED"
        assert not isinstance(exc, AppException)
