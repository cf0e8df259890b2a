"""Broker connectivity check."""

import sys

import click

from webhook_bridge.cli.utils import coro, error, field, info, success
from webhook_bridge.core.settings import get_rabbit_settings
from webhook_bridge.infra.messaging.connection import ConnectionManager
from webhook_bridge.infra.messaging.diagnostics import mask_url


@click.command(name="check-broker")
@click.option(
    "--exchange",
    default=None,
    help="Also declare this durable fanout exchange after connecting",
)
@coro
async def check_broker(exchange: str | None) -> None:
    """Connect to RabbitMQ once, report the result and disconnect.

    Exits with status 1 if the connection (or the exchange declare) fails.
    """
    settings = get_rabbit_settings()
    failures: list[str] = []

    manager = ConnectionManager(
        settings.url,
        settings.vhost,
        max_attempts=1,
        connection_timeout=settings.connection_timeout,
        connection_name=settings.connection_name,
        on_fatal=failures.append,
    )

    info(f"Connecting to {mask_url(settings.url) or '<RABBITMQ_URL not set>'}")
    try:
        connected = await manager.connect()
        if connected and exchange:
            await manager.ensure_exchange(exchange)
            field("exchange", f"{exchange} (fanout, durable)")
    except Exception as e:
        error(f"Exchange check failed: {e}")
        sys.exit(1)
    finally:
        await manager.shutdown()

    if not connected:
        error("RabbitMQ is unreachable; see the log output for the classified cause")
        sys.exit(1)

    success("RabbitMQ connection OK")
