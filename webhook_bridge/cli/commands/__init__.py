"""CLI command modules."""

from webhook_bridge.cli.commands import broker, config, server

__all__ = ["broker", "config", "server"]
