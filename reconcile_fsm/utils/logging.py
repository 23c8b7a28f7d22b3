"""Structured logging for the engine and the CLI.

Engine modules log through structlog loggers that wrap standard library
loggers under the ``reconcile_fsm`` namespace. Importing the package never
touches the host application's logging setup: events go wherever the host
has configured structlog and ``logging`` to send them. Only the CLI calls
:func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any, TextIO

import structlog

ROOT_LOGGER = "reconcile_fsm"

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Get the correlation ID of the current context, creating one if unset."""
    cid = correlation_id_var.get()
    if not cid:
        cid = uuid.uuid4().hex[:8]
        correlation_id_var.set(cid)
    return cid


def add_correlation_id(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    cid = correlation_id_var.get()
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def configure_logging(
    level: str = "info",
    format_type: str = "json",
    stream: TextIO | None = None,
) -> None:
    """
    Send the package's log events to ``stream``.

    Meant for the command line entry point. Library users configure
    structlog and ``logging`` themselves.

    Args:
        level: Log level (debug, info, warn, error)
        format_type: Output format ('json' or 'text')
        stream: Output stream (default: sys.stderr)
    """
    log_level = LEVELS.get(level.lower(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(ROOT_LOGGER)
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    renderer: structlog.types.Processor
    if format_type == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_correlation_id,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """
    Get a lazily bound logger for a module of the package.

    The logger resolves structlog's configuration on first use, so a host
    that configures logging after importing the package is still honoured.

    Args:
        name: Module path relative to the package, e.g. ``machine.machine``
    """
    return structlog.wrap_logger(logging.getLogger(f"{ROOT_LOGGER}.{name}"))
