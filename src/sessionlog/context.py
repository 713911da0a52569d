"""Per-execution-unit logging context using contextvars.

Each thread and each asyncio task sees its own current ``LoggingContext``.
Threads start from the defaults; tasks start from a copy of the context they
were spawned from. Changes made by one unit are never visible to another, so a
session that must cross a unit boundary is handed over explicitly with
``enter_session``.
"""
import contextvars
import functools
import inspect
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from src.sessionlog.sinks import Sink, stdout_sink


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

NIL_SESSION_ID = uuid.UUID(int=0)


def utc_now() -> datetime:
    """Default clock: current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LoggingConfig:
    """Clock and sink used by one execution unit.

    Args:
        clock: Returns the instant stamped on each event
        sink: Receives each encoded line
    """

    clock: Clock = utc_now
    sink: Sink = stdout_sink


@dataclass(frozen=True)
class LoggingContext:
    """Snapshot of one execution unit's logging state.

    Snapshots are immutable; every mutation installs a new one.
    """

    config: LoggingConfig = field(default_factory=LoggingConfig)
    session_id: uuid.UUID = NIL_SESSION_ID

    @property
    def clock(self) -> Clock:
        return self.config.clock

    @property
    def sink(self) -> Sink:
        return self.config.sink

    @property
    def has_session(self) -> bool:
        return self.session_id != NIL_SESSION_ID


_DEFAULT_CONTEXT = LoggingContext()

_context_var: contextvars.ContextVar[LoggingContext] = contextvars.ContextVar(
    "sessionlog_context", default=_DEFAULT_CONTEXT
)


def get_context() -> LoggingContext:
    """Get the calling unit's context, created with defaults on first use."""
    return _context_var.get()


def get_session_id() -> uuid.UUID:
    """Get the calling unit's session ID (nil when no session is active)."""
    return _context_var.get().session_id


def _set_session(session_id: uuid.UUID) -> None:
    _context_var.set(replace(_context_var.get(), session_id=session_id))


def configure(config: LoggingConfig) -> None:
    """Replace clock and sink for the calling unit.

    Configuring always starts fresh: the session is reset to nil.

    Args:
        config: New clock and sink
    """
    _context_var.set(LoggingContext(config=config, session_id=NIL_SESSION_ID))
    logger.debug(
        "Logging context configured",
        extra={
            "clock": getattr(config.clock, "__name__", type(config.clock).__name__),
            "sink": getattr(config.sink, "__name__", type(config.sink).__name__),
        },
    )


def reset_context() -> None:
    """Return the calling unit to the default clock, sink and no session."""
    _context_var.set(_DEFAULT_CONTEXT)


def new_session() -> uuid.UUID:
    """Start a new random (version 4) session and return its ID."""
    session_id = uuid.uuid4()
    _set_session(session_id)
    logger.debug("Session started", extra={"session_id": str(session_id)})
    return session_id


def enter_session(session_id: Union[uuid.UUID, str]) -> None:
    """Join a session created elsewhere.

    Args:
        session_id: Session ID as UUID or in textual form

    Raises:
        ValueError: If a string is not a valid UUID
    """
    if not isinstance(session_id, uuid.UUID):
        session_id = uuid.UUID(session_id)
    _set_session(session_id)
    logger.debug("Session entered", extra={"session_id": str(session_id)})


def clear_session() -> None:
    """Leave the current session."""
    _set_session(NIL_SESSION_ID)


class session:
    """Context manager scoping a session to a block.

    Enters ``session_id`` (or a fresh one) and restores whatever session was
    active before on exit. Works with both ``with`` and ``async with``.

    Example:
        with session() as sid:
            info("handling request")  # carries sid

        async with session(incoming_id):
            info("resumed")
    """

    def __init__(self, session_id: Optional[Union[uuid.UUID, str]] = None):
        """Initialize session scope.

        Args:
            session_id: Session to join; a new one is generated when omitted
        """
        if session_id is None:
            session_id = uuid.uuid4()
        elif not isinstance(session_id, uuid.UUID):
            session_id = uuid.UUID(session_id)
        self.session_id: uuid.UUID = session_id
        self._previous: uuid.UUID = NIL_SESSION_ID

    def __enter__(self) -> uuid.UUID:
        self._previous = get_session_id()
        _set_session(self.session_id)
        return self.session_id

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _set_session(self._previous)

    async def __aenter__(self) -> uuid.UUID:
        return self.__enter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def with_new_session(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator running each call of ``func`` in a fresh session.

    Example:
        @with_new_session
        async def handle(message):
            info("processing")  # logged with a new session ID per call
    """
    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            async with session():
                return await func(*args, **kwargs)

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with session():
            return func(*args, **kwargs)

    return wrapper
