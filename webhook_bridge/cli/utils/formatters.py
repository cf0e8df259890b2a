"""Output formatting utilities for CLI commands."""

from typing import Any

import click


def _emit(symbol: str, message: str, color: str, *, err: bool = False) -> None:
    click.secho(f"{symbol} {message}", fg=color, err=err)


def success(message: str) -> None:
    """Print a success message in green."""
    _emit("✓", message, "green")


def error(message: str) -> None:
    """Print an error message in red on stderr."""
    _emit("✗", message, "red", err=True)


def warning(message: str) -> None:
    """Print a warning message in yellow."""
    _emit("⚠", message, "yellow")


def info(message: str) -> None:
    """Print an info message in blue."""
    _emit("ℹ", message, "blue")


def header(message: str) -> None:
    """Print a header message in cyan bold."""
    click.secho(f"\n{message}", fg="cyan", bold=True)


def field(key: str, value: Any, width: int = 28) -> None:
    """Print an aligned ``key = value`` line."""
    click.echo(f"  {key:{width}} = {value}")
