"""Broker gateway dependency.

Route handlers never see aio-pika handles. They receive a BrokerGateway,
which the ConnectionManager satisfies structurally, so tests can override
the dependency with a fake.

Usage:
    from webhook_bridge.core.dependencies.messaging import OptionalBrokerGatewayDep

    @router.post("/webhook")
    async def receive(broker: OptionalBrokerGatewayDep):
        if broker is not None and not broker.is_available:
            broker.schedule_reconnect()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Protocol, runtime_checkable

from fastapi import Depends

if TYPE_CHECKING:
    from datetime import datetime

    from webhook_bridge.infra.messaging.connection import BrokerStatus


@runtime_checkable
class BrokerGateway(Protocol):
    """What the HTTP layer may do with the broker."""

    @property
    def is_available(self) -> bool: ...

    @property
    def attempt_count(self) -> int: ...

    @property
    def max_attempts(self) -> int: ...

    def status(self) -> BrokerStatus: ...

    def schedule_reconnect(self) -> bool: ...

    def report_link_failure(self, exc: BaseException) -> None: ...

    async def ensure_exchange(self, name: str) -> None: ...

    async def publish(self, exchange: str, body: bytes, timestamp: datetime) -> None: ...


def get_optional_broker_gateway() -> BrokerGateway | None:
    """Return the connection manager, or None before startup."""
    from webhook_bridge.infra.messaging.connection import get_connection_manager

    return get_connection_manager()


OptionalBrokerGatewayDep = Annotated[BrokerGateway | None, Depends(get_optional_broker_gateway)]
"""Broker gateway, or None outside the lifespan; override in tests."""
