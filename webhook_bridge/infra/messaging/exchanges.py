"""Exchange assertion with a per-link confirmation cache.

Every webhook names its target exchange, so the bridge declares exchanges on
demand. Declaring is idempotent at the broker (a no-op when an identical
exchange exists) but costs a round trip, which the ExchangeCache saves for
names already confirmed over the current link.

All exchanges are declared as durable ``fanout``. A pre-existing exchange of
another type or durability makes the broker reject the declare (and close
the channel); that surfaces as ExchangeAssertionFailure and is never retried
with different parameters.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aio_pika import ExchangeType

from webhook_bridge.core.exceptions import BrokerUnavailable, ExchangeAssertionFailure
from webhook_bridge.infra.metrics import tracking

if TYPE_CHECKING:
    from aio_pika.abc import AbstractChannel

    from webhook_bridge.infra.messaging.cache import ExchangeCache

logger = logging.getLogger(__name__)

EXCHANGE_TYPE = ExchangeType.FANOUT
EXCHANGE_DURABLE = True


class ExchangeAssertionService:
    """Create-or-confirm exchanges, using the cache as a fast path.

    Example:
        >>> service = ExchangeAssertionService(cache, timeout=10.0)
        >>> await service.ensure_exchange(channel, "orders")
    """

    def __init__(self, cache: ExchangeCache, timeout: float | None = None) -> None:
        """Initialize the service.

        Args:
            cache: Cache owned by the connection manager for the current link.
            timeout: Seconds to wait for the declare reply, None to wait forever.
        """
        self._cache = cache
        self._timeout = timeout

    async def ensure_exchange(self, channel: AbstractChannel | None, name: str) -> None:
        """Guarantee that exchange ``name`` exists on the broker.

        Args:
            channel: Open channel of the current link, or None if there is none.
            name: Exchange name.

        Raises:
            BrokerUnavailable: No usable channel.
            ExchangeAssertionFailure: The broker rejected or did not confirm the declare.
        """
        if channel is None or channel.is_closed:
            raise BrokerUnavailable(reconnect_attempt=0, max_attempts=0)

        if self._cache.contains(name):
            tracking.track_exchange_cache_hit()
            return

        generation = self._cache.generation
        try:
            await channel.declare_exchange(
                name,
                EXCHANGE_TYPE,
                durable=EXCHANGE_DURABLE,
                timeout=self._timeout,
            )
        except Exception as e:
            self._cache.remove(name)
            tracking.track_exchange_declaration("failure")
            logger.error(
                "Failed to declare exchange",
                extra={"exchange": name, "error": str(e), "error_type": type(e).__name__},
            )
            raise ExchangeAssertionFailure(name, str(e) or type(e).__name__) from e

        tracking.track_exchange_declaration("success")
        if self._cache.add(name, generation=generation):
            logger.info("Exchange ready", extra={"exchange": name, "type": EXCHANGE_TYPE.value})
        else:
            logger.debug(
                "Exchange confirmed over a link that has since been replaced; not cached",
                extra={"exchange": name},
            )
