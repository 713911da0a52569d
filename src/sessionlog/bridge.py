"""Bridge from stdlib ``logging`` into the JSON emission path."""
import contextvars
import logging

from src.sessionlog.logger import log
from src.sessionlog.models import LogEvent, LogLevel


_MISSING = object()

# Set while a bridged record is being emitted, so a sink that writes back
# into stdlib logging cannot loop through this handler again.
_emitting: contextvars.ContextVar[bool] = contextvars.ContextVar(
    "sessionlog_bridge_emitting", default=False
)


class SessionLogHandler(logging.Handler):
    """Handler turning stdlib log records into JSON log events.

    Records at ERROR and above become ERROR events; when the record carries
    exception info, the exception is the event's error. Everything else
    becomes an INFO event. A payload passed as ``extra={"data": ...}`` is
    attached as the event's data.

    Example:
        logging.getLogger().addHandler(SessionLogHandler())
        logging.getLogger(__name__).error("payment failed", exc_info=True)
    """

    def emit(self, record: logging.LogRecord) -> None:
        """Emit record through the calling unit's sink.

        Args:
            record: LogRecord to convert
        """
        if _emitting.get():
            return

        token = _emitting.set(True)
        try:
            log(self.to_event(record))
        except Exception:
            self.handleError(record)
        finally:
            _emitting.reset(token)

    def to_event(self, record: logging.LogRecord) -> LogEvent:
        """Convert a LogRecord to a LogEvent."""
        message = record.getMessage()
        payload = getattr(record, "data", _MISSING)
        has_data = payload is not _MISSING

        if record.levelno >= logging.ERROR:
            exc = record.exc_info[1] if record.exc_info else None
            return LogEvent(
                level=LogLevel.ERROR,
                message=message,
                data=payload if has_data else None,
                error=exc,
                has_data=has_data,
                has_error=exc is not None,
            )

        return LogEvent(
            level=LogLevel.INFO,
            message=message,
            data=payload if has_data else None,
            has_data=has_data,
        )
