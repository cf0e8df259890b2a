"""RabbitMQ messaging infrastructure.

The ConnectionManager owns the single broker link; the exchange cache and
assertion service live behind it. Request handlers reach the broker only
through the manager.
"""

from webhook_bridge.infra.messaging.cache import ExchangeCache
from webhook_bridge.infra.messaging.connection import (
    BrokerState,
    BrokerStatus,
    ConnectionManager,
    LinkEvent,
    build_broker_url,
    get_connection_manager,
    set_connection_manager,
)
from webhook_bridge.infra.messaging.diagnostics import (
    classify_connect_error,
    is_link_closed_error,
    mask_url,
)
from webhook_bridge.infra.messaging.exchanges import ExchangeAssertionService

__all__ = [
    "BrokerState",
    "BrokerStatus",
    "ConnectionManager",
    "ExchangeAssertionService",
    "ExchangeCache",
    "LinkEvent",
    "build_broker_url",
    "classify_connect_error",
    "get_connection_manager",
    "is_link_closed_error",
    "mask_url",
    "set_connection_manager",
]
