"""Exceptions raised by the logging core."""
from typing import Any, Dict, Optional


class SessionLogError(Exception):
    """Base exception for logging core errors.

    Args:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "ALREADY_INITIALIZED")
        details: Values involved in the failure
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(f"[{error_code}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Structured form, suitable as a ``data`` payload or ``extra=``."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "exception_type": self.__class__.__name__,
        }


class AlreadyInitializedError(SessionLogError):
    """The application name was already set for this process.

    Args:
        current: Name stored by the first successful init
        rejected: Name passed to the rejected call
    """

    def __init__(self, current: str, rejected: str):
        super().__init__(
            message=f"Application name already initialized as '{current}'",
            error_code="ALREADY_INITIALIZED",
            details={"current": current, "rejected": rejected},
        )
        self.current = current
        self.rejected = rejected


class LogEncodingError(SessionLogError):
    """A log payload has no JSON rendering.

    The underlying serialization error is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Failed to encode log event",
        payload_type: Optional[str] = None,
    ):
        details = {}
        if payload_type is not None:
            details["payload_type"] = payload_type
        super().__init__(
            message=message,
            error_code="LOG_ENCODING_FAILED",
            details=details,
        )
