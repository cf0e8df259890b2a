"""Failure classification for broker connections and operations."""

from __future__ import annotations

import asyncio
import re
import socket
from urllib.parse import urlsplit, urlunsplit

from aio_pika.exceptions import (
    AMQPConnectionError,
    ChannelClosed,
    ChannelInvalidStateError,
    ProbableAuthenticationError,
)

from webhook_bridge.core.exceptions import ConnectFailure, ConnectFailureKind

_REFUSED_PATTERN = re.compile(r"ECONNREFUSED|connection refused|connect call failed", re.IGNORECASE)
_ACCESS_PATTERN = re.compile(
    r"ACCESS_REFUSED|access denied|access refused|authentication|not_allowed|vhost",
    re.IGNORECASE,
)
_HOST_PATTERN = re.compile(
    r"ENOTFOUND|EAI_AGAIN|name or service not known|nodename nor servname"
    r"|temporary failure in name resolution|getaddrinfo",
    re.IGNORECASE,
)
_TIMEOUT_PATTERN = re.compile(r"ETIMEDOUT|timed out|timeout", re.IGNORECASE)
_LINK_CLOSED_PATTERN = re.compile(
    r"channel (is )?closed|connection (is )?closed|channel invalid state"
    r"|writer is None|connection was stuck|connection reset",
    re.IGNORECASE,
)


def _chain(exc: BaseException) -> list[BaseException]:
    """Return ``exc`` followed by its causes/contexts (cycle safe)."""
    seen: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in seen:
        seen.append(current)
        current = current.__cause__ or current.__context__
    return seen


def classify_connect_error(exc: BaseException) -> ConnectFailure:
    """Classify a connect failure for diagnostics.

    Looks at exception types first, then falls back to message content, as
    aio-pika wraps most socket errors into AMQPConnectionError with the
    original errno text. Not exhaustive; unmatched failures are OTHER.

    Args:
        exc: Exception raised while opening the connection or channel.

    Returns:
        ConnectFailure carrying the classified kind and the error text.
    """
    chain = _chain(exc)
    reason = str(exc) or type(exc).__name__

    for item in chain:
        if isinstance(item, (asyncio.TimeoutError, TimeoutError)):
            return ConnectFailure(ConnectFailureKind.TIMEOUT, reason)
        if isinstance(item, ConnectionRefusedError):
            return ConnectFailure(ConnectFailureKind.REFUSED, reason)
        if isinstance(item, socket.gaierror):
            return ConnectFailure(ConnectFailureKind.HOST_NOT_FOUND, reason)
        if isinstance(item, ProbableAuthenticationError):
            return ConnectFailure(ConnectFailureKind.ACCESS_DENIED, reason)

    text = " ".join(str(item) for item in chain)
    if _REFUSED_PATTERN.search(text):
        return ConnectFailure(ConnectFailureKind.REFUSED, reason)
    if _ACCESS_PATTERN.search(text):
        return ConnectFailure(ConnectFailureKind.ACCESS_DENIED, reason)
    if _HOST_PATTERN.search(text):
        return ConnectFailure(ConnectFailureKind.HOST_NOT_FOUND, reason)
    if _TIMEOUT_PATTERN.search(text):
        return ConnectFailure(ConnectFailureKind.TIMEOUT, reason)
    return ConnectFailure(ConnectFailureKind.OTHER, reason)


def is_link_closed_error(exc: BaseException) -> bool:
    """Check whether an operation failed because the channel or connection closed.

    Args:
        exc: Exception raised by a declare or publish call.

    Returns:
        True if the failure means the current link is no longer usable.
    """
    for item in _chain(exc):
        # The broker closes the channel on any channel-level error (e.g. a
        # PRECONDITION_FAILED declare), so ChannelClosed always means the link is gone
        if isinstance(
            item, (ChannelClosed, ChannelInvalidStateError, AMQPConnectionError, ConnectionError),
        ):
            return True
        if _LINK_CLOSED_PATTERN.search(str(item)):
            return True
    return False


def mask_url(url: str | None) -> str | None:
    """Return ``url`` with the password replaced by ``***`` for logging."""
    if not url:
        return url
    parts = urlsplit(url)
    if parts.password is None:
        return url
    userinfo = f"{parts.username}:***" if parts.username else ":***"
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urlunsplit((parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment))
