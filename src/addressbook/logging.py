"""
Structured logging for the address book service

structlog renders through the stdlib ``logging`` module, so uvicorn's and
the service's events share one handler and one level.
"""

import logging
import secrets
import sys
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, unbind_contextvars

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def resolve_level(level: str | int) -> int:
    """Map a level name like ``"warning"`` to its numeric value; unknown names mean INFO."""
    if isinstance(level, int):
        return level
    return _LEVELS.get(level.strip().lower(), logging.INFO)


def configure_logging(level: str | int = "info", console: bool = False) -> None:
    """Configure structlog and the root logger.

    Args:
        level: Minimum level, as a name (``ADDRESSBOOK_LOG_LEVEL``) or number
        console: Colored human-readable output instead of JSON lines
    """
    numeric_level = resolve_level(level)

    logging.basicConfig(
        level=numeric_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if console
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            # request_id / user_id bound by the middleware and the GraphQL context
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def set_request_context(request_id: str | None = None) -> str:
    """Start a fresh logging context for one request and return its id."""
    clear_contextvars()
    request_id = request_id or secrets.token_hex(8)
    bind_contextvars(request_id=request_id)
    return request_id


def bind_user_id(user_id: str | None) -> None:
    """Attach (or detach) the authenticated user's id on subsequent log events."""
    if user_id:
        bind_contextvars(user_id=user_id)
    else:
        unbind_contextvars("user_id")


def clear_request_context() -> None:
    clear_contextvars()
