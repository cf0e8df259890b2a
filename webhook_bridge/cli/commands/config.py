"""Configuration management commands."""

import json
import sys

import click

from webhook_bridge.cli.utils import error, field, header, success, warning
from webhook_bridge.core.settings import get_settings
from webhook_bridge.infra.messaging.connection import build_broker_url
from webhook_bridge.infra.messaging.diagnostics import mask_url


@click.group(name="config")
def config() -> None:
    """Configuration management commands."""


def _effective_config(show_secrets: bool) -> dict[str, dict[str, object]]:
    settings = get_settings()
    app, rabbit, logging_ = settings.app, settings.rabbit, settings.logging

    token: object = None
    if app.auth_token is not None:
        token = app.auth_token.get_secret_value() if show_secrets else "***"

    broker_url: str | None = None
    if rabbit.url:
        broker_url = build_broker_url(rabbit.url, rabbit.vhost)
        if not show_secrets:
            broker_url = mask_url(broker_url)

    return {
        "app": {
            "service_name": app.service_name,
            "environment": app.environment,
            "host": app.host,
            "port": app.port,
            "debug": app.debug,
            "auth_token": token,
            "enable_metrics": app.enable_metrics,
        },
        "rabbitmq": {
            "url": broker_url,
            "vhost": rabbit.vhost,
            "max_reconnect_attempts": rabbit.max_reconnect_attempts,
            "reconnect_interval": rabbit.reconnect_interval,
            "connection_timeout": rabbit.connection_timeout,
            "publish_timeout": rabbit.publish_timeout,
            "startup_require_rabbit": rabbit.startup_require_rabbit,
        },
        "logging": {
            "level": logging_.level,
            "json_logs": logging_.json_logs,
            "file": logging_.effective_file_path,
        },
    }


@config.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="table",
    help="Output format",
)
@click.option(
    "--show-secrets/--hide-secrets",
    default=False,
    help="Show sensitive values (token, broker password)",
)
def show(output_format: str, show_secrets: bool) -> None:
    """Display the effective configuration."""
    try:
        config_dict = _effective_config(show_secrets)
    except Exception as e:
        error(f"Failed to load configuration: {e}")
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(config_dict, indent=2, default=str))
        return

    if not show_secrets:
        warning("Secrets are hidden. Use --show-secrets to display them.")
    for section, values in config_dict.items():
        header(f"[{section.upper()}]")
        for key, value in values.items():
            field(key, value)
    success("Configuration loaded")
