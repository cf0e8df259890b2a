"""FastAPI dependencies for route handlers.

Features import dependencies from here rather than from ``infra`` directly.

Usage:
    from webhook_bridge.core.dependencies import OptionalBrokerGatewayDep

    @router.get("/status")
    async def status(broker: OptionalBrokerGatewayDep):
        return broker.status() if broker else None
"""

from webhook_bridge.core.dependencies.messaging import (
    BrokerGateway,
    OptionalBrokerGatewayDep,
    get_optional_broker_gateway,
)

__all__ = [
    "BrokerGateway",
    "OptionalBrokerGatewayDep",
    "get_optional_broker_gateway",
]
