"""CLI utilities for running async operations and formatting output."""

from webhook_bridge.cli.utils.async_runner import coro
from webhook_bridge.cli.utils.formatters import (
    error,
    field,
    header,
    info,
    success,
    warning,
)

__all__ = [
    "coro",
    "error",
    "field",
    "header",
    "info",
    "success",
    "warning",
]
