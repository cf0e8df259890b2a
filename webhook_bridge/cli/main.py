"""Main CLI entry point for webhook-bridge management commands."""

import click

from webhook_bridge.cli.commands import broker, config, server
from webhook_bridge.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="webhook-bridge")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Webhook Bridge CLI - publish HTTP webhooks to RabbitMQ.

    \b
    Commands:
      serve         Run the HTTP server
      config        Configuration management
      check-broker  Test RabbitMQ connectivity

    \b
    Quick Start:
      webhook-bridge config show
      webhook-bridge check-broker --exchange orders
      webhook-bridge serve --port 3000
    """
    ctx.ensure_object(dict)


cli.add_command(server.serve)
cli.add_command(config.config)
cli.add_command(broker.check_broker)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
