"""Webhook ingestion pipeline.

Order of checks for every request:

1. ``token`` query parameter against the configured secret (401).
2. ``exchange`` query parameter present and a legal exchange name (400).
3. Broker link usable, otherwise trigger a reconnect and answer 503.
4. Ensure the exchange exists.
5. Build and serialize the envelope.
6. Publish it.

Failures in steps 4-6 caused by a channel or connection closing underneath
the request are reported to the connection manager before the 500 goes out.
"""

from __future__ import annotations

from datetime import UTC, datetime
import hmac
import json
import logging
from typing import TYPE_CHECKING, Annotated, Any
from urllib.parse import parse_qsl

from fastapi import Depends

# Runtime import so FastAPI can resolve the Annotated[..., Depends(...)] metadata
from webhook_bridge.core.dependencies.messaging import (  # noqa: TC001
    BrokerGateway,
    OptionalBrokerGatewayDep,
)
from webhook_bridge.core.exceptions import (
    AppException,
    AuthenticationFailure,
    BrokerUnavailable,
    PublishFailure,
    ValidationFailure,
)
from webhook_bridge.core.settings import get_app_settings
from webhook_bridge.features.webhooks.schemas import (
    ParamValue,
    WebhookAccepted,
    WebhookEnvelope,
    format_timestamp,
)
from webhook_bridge.infra.messaging.diagnostics import is_link_closed_error
from webhook_bridge.infra.metrics import tracking

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.datastructures import Headers, QueryParams

logger = logging.getLogger(__name__)

CONTROL_PARAMS = frozenset({"token", "exchange"})
MAX_EXCHANGE_NAME_BYTES = 255
RESERVED_EXCHANGE_PREFIX = "amq."
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _group(items: list[tuple[str, str]]) -> dict[str, ParamValue]:
    """Fold repeated keys into lists, keeping first-seen key order."""
    grouped: dict[str, ParamValue] = {}
    for key, value in items:
        current = grouped.get(key)
        if current is None:
            grouped[key] = value
        elif isinstance(current, list):
            current.append(value)
        else:
            grouped[key] = [current, value]
    return grouped


def collect_params(query_params: QueryParams) -> dict[str, ParamValue]:
    """Query parameters minus the control parameters."""
    return _group([(k, v) for k, v in query_params.multi_items() if k not in CONTROL_PARAMS])


def collect_headers(headers: Headers) -> dict[str, str]:
    """Header names lower-cased; repeated headers joined with ``", "``."""
    collected: dict[str, str] = {}
    for raw_name, raw_value in headers.raw:
        name = raw_name.decode("latin-1").lower()
        value = raw_value.decode("latin-1")
        collected[name] = f"{collected[name]}, {value}" if name in collected else value
    return collected


def _media_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def _is_json(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


def parse_body(raw: bytes, content_type: str | None) -> Any:
    """Decode a request body.

    JSON media types are parsed, form bodies become a mapping with repeated
    keys as lists, an empty body becomes ``{}``, anything else is kept as
    UTF-8 text.

    Raises:
        ValidationFailure: The body claims to be JSON but is not.
    """
    if not raw:
        return {}

    media_type = _media_type(content_type)
    if _is_json(media_type):
        try:
            return json.loads(raw)
        except ValueError as e:
            raise ValidationFailure(
                detail="Request body is not valid JSON",
                extra={"details": str(e)},
            ) from e
    if media_type == FORM_CONTENT_TYPE:
        text = raw.decode("utf-8", errors="replace")
        return _group(parse_qsl(text, keep_blank_values=True))
    return raw.decode("utf-8", errors="replace")


def validate_exchange_name(name: str | None) -> str:
    """Return ``name`` if it can be used as a target exchange.

    Raises:
        ValidationFailure: Missing, too long, or in the reserved ``amq.`` namespace.
    """
    if not name:
        raise ValidationFailure(
            detail="Query parameter 'exchange' is required",
            extra={"parameter": "exchange"},
        )
    if len(name.encode("utf-8")) > MAX_EXCHANGE_NAME_BYTES:
        raise ValidationFailure(
            detail=f"Exchange name must be at most {MAX_EXCHANGE_NAME_BYTES} bytes",
            extra={"parameter": "exchange"},
        )
    if name.startswith(RESERVED_EXCHANGE_PREFIX):
        raise ValidationFailure(
            detail=f"Exchange names starting with '{RESERVED_EXCHANGE_PREFIX}' are reserved",
            extra={"parameter": "exchange"},
        )
    return name


class WebhookService:
    """Runs the ingestion pipeline for one request at a time."""

    def __init__(self, broker: BrokerGateway | None, auth_token: str | None) -> None:
        self._broker = broker
        self._auth_token = auth_token

    def verify_token(self, token: str | None) -> None:
        """Constant-time comparison against the configured secret.

        Raises:
            AuthenticationFailure: Token missing, wrong, or no secret configured.
        """
        if not self._auth_token or not token:
            raise AuthenticationFailure()
        if not hmac.compare_digest(token.encode("utf-8"), self._auth_token.encode("utf-8")):
            raise AuthenticationFailure()

    def require_broker(self) -> None:
        """Fail fast with 503 (and arm a reconnect) when no link is usable.

        A missing gateway means startup has not finished or shutdown has begun.
        """
        if self._broker is None:
            raise BrokerUnavailable(reconnect_attempt=0, max_attempts=0)
        if self._broker.is_available:
            return
        self._broker.schedule_reconnect()
        raise BrokerUnavailable(
            reconnect_attempt=self._broker.attempt_count,
            max_attempts=self._broker.max_attempts,
        )

    async def handle(self, request: Request) -> WebhookAccepted:
        """Validate, publish and describe the outcome of one webhook.

        Raises:
            AppException: Any failure; rendered by the global exception handlers.
        """
        try:
            self.verify_token(request.query_params.get("token"))
        except AuthenticationFailure:
            tracking.track_webhook("unauthorized")
            logger.warning(
                "Rejected webhook with invalid token",
                extra={"client": request.client.host if request.client else None},
            )
            raise

        try:
            exchange = validate_exchange_name(request.query_params.get("exchange"))
            self.require_broker()
        except ValidationFailure:
            tracking.track_webhook("invalid")
            raise
        except BrokerUnavailable:
            tracking.track_webhook("unavailable")
            raise

        try:
            accepted = await self._publish(request, exchange)
        except ValidationFailure:
            tracking.track_webhook("invalid")
            raise
        except BrokerUnavailable:
            tracking.track_webhook("unavailable")
            raise
        except AppException as e:
            tracking.track_webhook("failed")
            self._check_link(e.__cause__ or e)
            raise
        except Exception as e:
            tracking.track_webhook("failed")
            logger.exception("Failed to process webhook", extra={"exchange": exchange})
            self._check_link(e)
            raise PublishFailure(exchange, str(e) or type(e).__name__) from e

        tracking.track_webhook("published")
        return accepted

    async def _publish(self, request: Request, exchange: str) -> WebhookAccepted:
        await self._broker.ensure_exchange(exchange)

        received_at = datetime.now(UTC)
        raw_body = await request.body()
        envelope = WebhookEnvelope(
            timestamp=format_timestamp(received_at),
            method=request.method,
            params=collect_params(request.query_params),
            body=parse_body(raw_body, request.headers.get("content-type")),
            headers=collect_headers(request.headers),
            client_address=request.client.host if request.client else None,
            path=request.url.path,
            original_url=_original_url(request),
        )
        payload = envelope.to_bytes()

        await self._broker.publish(exchange, payload, received_at)

        logger.info(
            "Webhook published",
            extra={"exchange": exchange, "method": request.method, "size_bytes": len(payload)},
        )
        logger.debug(
            "Webhook payload",
            extra={"exchange": exchange, "payload": envelope.model_dump(by_alias=True)},
        )
        return WebhookAccepted(exchange=exchange, timestamp=envelope.timestamp)

    def _check_link(self, exc: BaseException) -> None:
        if is_link_closed_error(exc):
            self._broker.report_link_failure(exc)


def _original_url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def get_webhook_service(broker: OptionalBrokerGatewayDep) -> WebhookService:
    """Build the pipeline with the configured token."""
    settings = get_app_settings()
    token = settings.auth_token.get_secret_value() if settings.auth_token else None
    return WebhookService(broker, token)


WebhookServiceDep = Annotated[WebhookService, Depends(get_webhook_service)]
