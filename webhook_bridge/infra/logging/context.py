"""Context management for structured logging.

Provides automatic context injection into log records using contextvars,
so request IDs and similar fields land in every log line emitted while a
request is being handled, without passing them around explicitly.
"""

from __future__ import annotations

from contextvars import ContextVar
import logging
from typing import Any

# Each async task gets its own copy automatically
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for the current async task.

    Args:
        **kwargs: Key-value pairs to add to logging context, e.g. request_id.

    Example:
        ```python
        set_log_context(request_id="abc-123", path="/webhook")
        logger.info("Processing request")  # Includes request_id and path
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current async task."""
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Logging filter that injects the contextvars log context into LogRecords.

    Installed on the root QueueHandler by configure_logging(), which makes
    the context fields available to JSONFormatter for every logger.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject context into log record.

        Args:
            record: The log record to enhance with context.

        Returns:
            True (always allow the record to be logged).
        """
        for key, value in _log_context.get().items():
            # Don't overwrite explicit extra= fields
            if not hasattr(record, key):
                setattr(record, key, value)

        return True
