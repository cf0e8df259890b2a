"""Health and debug endpoints.

Endpoints:
    GET /health - liveness plus broker link state, always 200
    GET /debug  - configuration presence flags, link counters, cached exchanges
"""

from __future__ import annotations

from fastapi import APIRouter

# Runtime import so FastAPI can resolve the Annotated[..., Depends(...)] metadata
from webhook_bridge.core.dependencies.messaging import OptionalBrokerGatewayDep  # noqa: TC001
from webhook_bridge.core.settings import get_app_settings, get_rabbit_settings
from webhook_bridge.features.status.schemas import DebugResponse, HealthResponse
from webhook_bridge.features.status.service import build_debug, build_health

router = APIRouter(tags=["status"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Process liveness and RabbitMQ connection state",
)
async def health(broker: OptionalBrokerGatewayDep) -> HealthResponse:
    return build_health(broker, get_rabbit_settings().max_reconnect_attempts)


@router.get(
    "/debug",
    response_model=DebugResponse,
    summary="Diagnostic snapshot",
    description="Configuration presence flags (never values), connection counters and exchange cache",
)
async def debug(broker: OptionalBrokerGatewayDep) -> DebugResponse:
    """Return configuration presence, connection counters and the exchange cache."""
    return build_debug(broker, get_app_settings(), get_rabbit_settings())
