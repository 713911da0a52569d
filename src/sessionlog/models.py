"""Log levels and the transient log event value."""
import enum
from dataclasses import dataclass
from typing import Any, Optional


class LogLevel(str, enum.Enum):
    """Severity levels understood by the encoder.

    Serialized as the member name.
    """

    INFO = "INFO"
    ERROR = "ERROR"


@dataclass(frozen=True)
class LogEvent:
    """One log call, built fresh per call and never stored.

    ``has_data`` and ``has_error`` mark presence separately from the values so
    that an explicit ``None`` payload still gets emitted.
    """

    level: LogLevel
    message: str
    data: Any = None
    error: Any = None
    has_data: bool = False
    has_error: bool = False

    @classmethod
    def info(cls, message: str) -> "LogEvent":
        return cls(level=LogLevel.INFO, message=message)

    @classmethod
    def with_data(cls, message: str, value: Any) -> "LogEvent":
        return cls(level=LogLevel.INFO, message=message, data=value, has_data=True)

    @classmethod
    def with_error(cls, message: str, err: Optional[Any]) -> "LogEvent":
        return cls(level=LogLevel.ERROR, message=message, error=err, has_error=True)
