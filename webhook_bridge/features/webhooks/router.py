"""Webhook ingestion endpoint.

``/webhook`` accepts every HTTP method. Authentication and the target
exchange come from the query string:

    POST /webhook?token=<secret>&exchange=<name>&source=github

Responses:
    200 - published; body carries the exchange and envelope timestamp
    400 - missing or illegal exchange name, malformed JSON body
    401 - token missing or wrong (checked before anything else)
    503 - broker link down; carries reconnectAttempt/maxAttempts
    500 - exchange assertion or publish failed; carries details

Exchange names longer than 255 bytes or inside the reserved ``amq.``
namespace are refused with 400 before the broker is touched. Declaring
them would fail with ACCESS_REFUSED and take the shared channel down
for every in-flight request.

Every standard method is routed, TRACE and CONNECT included. Non-standard
method names are answered with 405.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from webhook_bridge.features.webhooks.schemas import WebhookAccepted, WebhookError

# Runtime import so FastAPI can resolve the Annotated[..., Depends(...)] metadata
from webhook_bridge.features.webhooks.service import WebhookServiceDep  # noqa: TC001

router = APIRouter(tags=["webhooks"])

WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT"]


@router.api_route(
    "/webhook",
    methods=WEBHOOK_METHODS,
    response_model=WebhookAccepted,
    summary="Publish a webhook to RabbitMQ",
    responses={
        400: {"model": WebhookError, "description": "Invalid request"},
        401: {"model": WebhookError, "description": "Invalid or missing token"},
        500: {"model": WebhookError, "description": "Exchange assertion or publish failed"},
        503: {"model": WebhookError, "description": "RabbitMQ unavailable"},
    },
)
async def receive_webhook(request: Request, service: WebhookServiceDep) -> WebhookAccepted:
    """Publish the request (query, body, headers) to the named fanout exchange."""
    return await service.handle(request)
