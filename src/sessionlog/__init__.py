"""Structured JSON logging with per-unit sessions."""

from src.sessionlog.context import (
    NIL_SESSION_ID,
    LoggingConfig,
    LoggingContext,
    clear_session,
    configure,
    enter_session,
    get_context,
    get_session_id,
    new_session,
    reset_context,
    session,
    utc_now,
    with_new_session,
)
from src.sessionlog.encoder import encode, format_timestamp
from src.sessionlog.exceptions import (
    AlreadyInitializedError,
    LogEncodingError,
    SessionLogError,
)
from src.sessionlog.identity import (
    DEFAULT_APP_NAME,
    get_app_name,
    init,
    is_initialized,
)
from src.sessionlog.logger import data, error, info, log
from src.sessionlog.models import LogEvent, LogLevel
from src.sessionlog.sinks import LoggerSink, NullSink, StreamSink, stdout_sink

__all__ = [
    # Initialization
    "init",
    "get_app_name",
    "is_initialized",
    "DEFAULT_APP_NAME",
    # Context management
    "LoggingConfig",
    "LoggingContext",
    "NIL_SESSION_ID",
    "configure",
    "reset_context",
    "get_context",
    "get_session_id",
    "new_session",
    "enter_session",
    "clear_session",
    "session",
    "with_new_session",
    "utc_now",
    # Events and encoding
    "LogLevel",
    "LogEvent",
    "encode",
    "format_timestamp",
    # Entry points
    "info",
    "data",
    "error",
    "log",
    # Sinks
    "stdout_sink",
    "StreamSink",
    "LoggerSink",
    "NullSink",
    # Exceptions
    "SessionLogError",
    "AlreadyInitializedError",
    "LogEncodingError",
]
