"""Custom exception classes for the webhook bridge.

Request-path failures derive from AppException and are rendered by the
global exception handlers as ``{"success": false, "error": ...}`` bodies.
ConnectFailure belongs to the broker lifecycle and never reaches a client.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class AppException(Exception):
    """Base application exception.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message (returned as ``error``).
        type: Error type identifier, used in logs and metrics.
        extra: Additional fields merged into the response body.

    Example:
            raise AppException(
            status_code=400,
            detail="Query parameter 'exchange' is required",
            type="missing-exchange",
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.extra = extra or {}
        super().__init__(detail)


class AuthenticationFailure(AppException):
    """Raised when the webhook token is missing or does not match."""

    def __init__(self, detail: str = "Invalid or missing authentication token") -> None:
        super().__init__(status_code=401, detail=detail, type="authentication-failure")


class ValidationFailure(AppException):
    """Raised when a required request parameter is missing or malformed.

    Example:
            raise ValidationFailure(
            detail="Query parameter 'exchange' is required",
            extra={"parameter": "exchange"},
        )
    """

    def __init__(self, detail: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type="validation-failure",
            extra=extra,
        )


class BrokerUnavailable(AppException):
    """Raised when no usable broker channel exists at request time.

    The response carries the reconnect counters so callers can tell a
    transient outage from one that is about to exhaust the retry budget.
    """

    def __init__(
        self,
        reconnect_attempt: int,
        max_attempts: int,
        detail: str = "RabbitMQ is unavailable, reconnecting",
    ) -> None:
        self.reconnect_attempt = reconnect_attempt
        self.max_attempts = max_attempts
        super().__init__(
            status_code=503,
            detail=detail,
            type="broker-unavailable",
            extra={
                "reconnectAttempt": reconnect_attempt,
                "maxAttempts": max_attempts,
            },
        )


class ExchangeAssertionFailure(AppException):
    """Raised when the broker rejects or cannot confirm an exchange.

    Covers type/durability conflicts with an existing exchange as well as
    transport errors during the declare call.
    """

    def __init__(self, exchange: str, reason: str) -> None:
        self.exchange = exchange
        self.reason = reason
        super().__init__(
            status_code=500,
            detail=f"Failed to ensure exchange '{exchange}'",
            type="exchange-assertion-failure",
            extra={"details": reason},
        )


class PublishFailure(AppException):
    """Raised when a publish does not complete, e.g. the channel closed mid-publish."""

    def __init__(self, exchange: str, reason: str) -> None:
        self.exchange = exchange
        self.reason = reason
        super().__init__(
            status_code=500,
            detail="Failed to process webhook",
            type="publish-failure",
            extra={"details": reason},
        )


class ConnectFailureKind(str, Enum):
    """Diagnostic classification of a failed broker connect.

    Attributes:
        REFUSED: Nothing listening at the target address.
        ACCESS_DENIED: Credentials or vhost permissions rejected.
        HOST_NOT_FOUND: DNS resolution failed.
        TIMEOUT: Connect or channel open did not finish in time.
        OTHER: Anything else.
    """

    REFUSED = "connection_refused"
    ACCESS_DENIED = "access_denied"
    HOST_NOT_FOUND = "host_not_found"
    TIMEOUT = "timeout"
    OTHER = "other"


class ConnectFailure(Exception):
    """A broker connect attempt failed.

    The kind is for diagnostics only; it does not change retry behavior.
    """

    def __init__(self, kind: ConnectFailureKind, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind.value}: {reason}")
