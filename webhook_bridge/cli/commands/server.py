"""Server command."""

import click

from webhook_bridge.cli.utils import info, warning
from webhook_bridge.core.settings import get_app_settings


@click.command(name="serve")
@click.option(
    "--host",
    default=None,
    help="Host to bind (default: from settings, 0.0.0.0)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind (default: PORT or APP_PORT, 3000)",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    show_default=True,
    type=click.Choice(["debug", "info", "warning", "error", "critical"], case_sensitive=False),
    help="Uvicorn log level",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Run the webhook bridge with Uvicorn.

    The bridge keeps one RabbitMQ connection per process, so it always runs
    a single worker.

    Examples:
        \b
        # Listen on the configured port
        webhook-bridge serve

        # Development server with auto-reload
        webhook-bridge serve --reload --port 8080
    """
    import uvicorn

    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Starting webhook bridge on {host}:{port}")
    if not settings.is_token_configured:
        warning("AUTH_TOKEN is not set; all webhook requests will be rejected")

    uvicorn.run(
        "webhook_bridge.app.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level.lower(),
        access_log=True,
    )
