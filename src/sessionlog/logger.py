"""Level-specific entry points.

Each call builds one event, encodes it against the calling unit's context and
hands the line to that unit's sink. Sink errors propagate to the caller.

Example:
    from src.sessionlog import init, info, data, error, new_session

    init("billing")
    new_session()
    info("invoice run started")
    data("invoice totals", {"count": 3, "sum": 120.5})
    error("invoice run failed", exc)
"""
from typing import Any

from src.sessionlog.context import get_context
from src.sessionlog.encoder import encode
from src.sessionlog.models import LogEvent


def log(event: LogEvent) -> None:
    """Encode ``event`` and pass it to the calling unit's sink."""
    ctx = get_context()
    ctx.sink(encode(event, ctx))


def info(message: str) -> None:
    """Log an INFO event without payload."""
    log(LogEvent.info(message))


def data(message: str, value: Any) -> None:
    """Log an INFO event carrying a structured payload.

    The payload is emitted nested under the application name:
    ``"data": {"<app>": <value>}``.
    """
    log(LogEvent.with_data(message, value))


def error(message: str, err: Any) -> None:
    """Log an ERROR event carrying the debug rendering of ``err``."""
    log(LogEvent.with_error(message, err))
