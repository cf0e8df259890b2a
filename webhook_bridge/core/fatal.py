"""Process-level failure policy.

Both uncaught synchronous exceptions and exceptions nobody retrieved from
an asyncio task/future are fatal: they are logged at CRITICAL, queued log
records are flushed, and the process exits with code 1 so that the
supervisor restarts it. Exhausted broker reconnects end the same way.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import TYPE_CHECKING, Any, NoReturn

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

EXIT_FATAL = 1


def terminate_process(reason: str, exit_code: int = EXIT_FATAL) -> NoReturn:
    """Log ``reason``, flush logging and exit immediately.

    ``os._exit`` is used because this may run inside the event loop or an
    exception hook, where ``SystemExit`` would be swallowed or trigger a
    partial shutdown.
    """
    logger.critical("Terminating process", extra={"reason": reason, "exit_code": exit_code})

    from webhook_bridge.infra.logging import shutdown as shutdown_logging

    shutdown_logging()
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass
    os._exit(exit_code)


def _excepthook(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
    terminate_process(f"uncaught {exc_type.__name__}: {exc}")


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    exc = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if isinstance(exc, asyncio.CancelledError):
        return
    if exc is None:
        # Loop diagnostics without an exception (e.g. unclosed transports)
        logger.error(message, extra={"context": {k: repr(v) for k, v in context.items()}})
        return
    logger.critical(message, exc_info=(type(exc), exc, exc.__traceback__))
    terminate_process(f"unhandled async {type(exc).__name__}: {exc}")


def install_fatal_handlers(loop: asyncio.AbstractEventLoop | None = None) -> None:
    """Make uncaught exceptions and unretrieved task exceptions fatal.

    Args:
        loop: Event loop to install the handler on; the running loop by default.
    """
    sys.excepthook = _excepthook
    target = loop or asyncio.get_running_loop()
    target.set_exception_handler(_loop_exception_handler)
    logger.debug("Fatal exception handlers installed")
