"""Webhook envelope and response schemas.

The envelope is the message body published to RabbitMQ. Its JSON form is a
wire contract with downstream consumers: keys and their order are fixed,
output is compact UTF-8 with non-ASCII characters left unescaped.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ParamValue = str | list[str]


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ISO-8601 UTC with milliseconds and a ``Z`` suffix.

    Example:
        >>> format_timestamp(datetime(2025, 1, 2, 3, 4, 5, 678901, tzinfo=UTC))
        '2025-01-02T03:04:05.678Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WebhookEnvelope(BaseModel):
    """Everything the bridge captured from one webhook request.

    Example:
        ```json
        {
            "timestamp": "2025-01-01T00:00:00.000Z",
            "method": "POST",
            "params": {"source": "github", "tag": ["a", "b"]},
            "body": {"action": "opened"},
            "headers": {"content-type": "application/json"},
            "ip": "203.0.113.7",
            "path": "/webhook",
            "originalUrl": "/webhook?exchange=events&token=...&source=github"
        }
        ```
    """

    timestamp: str = Field(description="Receive time, ISO-8601 UTC with milliseconds")
    method: str = Field(description="HTTP method")
    params: dict[str, ParamValue] = Field(
        default_factory=dict,
        description="Query parameters without token and exchange",
    )
    body: Any = Field(default_factory=dict, description="Parsed request body")
    headers: dict[str, str] = Field(default_factory=dict, description="Lower-cased request headers")
    client_address: str | None = Field(default=None, alias="ip", description="Client address")
    path: str = Field(description="Request path")
    original_url: str = Field(alias="originalUrl", description="Path plus raw query string")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_bytes(self) -> bytes:
        """Serialize to the compact UTF-8 JSON wire form."""
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes | str) -> WebhookEnvelope:
        """Parse the wire form back into an envelope."""
        return cls.model_validate_json(data)


class WebhookAccepted(BaseModel):
    """Response for a webhook that was published."""

    success: bool = True
    message: str = Field(default="Webhook received and published to RabbitMQ")
    exchange: str = Field(description="Exchange the message was published to")
    timestamp: str = Field(description="Envelope timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Webhook received and published to RabbitMQ",
                "exchange": "orders",
                "timestamp": "2025-01-01T00:00:00.000Z",
            }
        },
    )


class WebhookError(BaseModel):
    """Error body returned by every failing webhook request.

    Broker-unavailable responses add ``reconnectAttempt`` and
    ``maxAttempts``; processing failures add ``details``.
    """

    success: bool = False
    error: str
    details: str | None = None
    reconnect_attempt: int | None = Field(default=None, alias="reconnectAttempt")
    max_attempts: int | None = Field(default=None, alias="maxAttempts")

    model_config = ConfigDict(populate_by_name=True)
