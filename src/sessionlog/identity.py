"""Process-wide application name, set at most once."""
import logging
import threading
from typing import Optional

from src.sessionlog.exceptions import AlreadyInitializedError


logger = logging.getLogger(__name__)

# Emitted as "app" when init() was never called
DEFAULT_APP_NAME = "sessionlog"


class AppIdentity:
    """Write-once cell holding the application name.

    The single write is serialized with a lock; reads after that are plain
    attribute reads. A second write raises instead of overwriting.
    """

    def __init__(self, default: str = DEFAULT_APP_NAME):
        self._default = default
        self._name: Optional[str] = None
        self._lock = threading.Lock()

    def set(self, name: str) -> None:
        """Store the application name.

        Args:
            name: Application name emitted with every log line

        Raises:
            ValueError: If name is empty
            AlreadyInitializedError: If a name was already stored
        """
        if not name:
            raise ValueError("app_name must be a non-empty string")

        with self._lock:
            if self._name is not None:
                logger.warning(
                    "Rejected second application name",
                    extra={"current": self._name, "rejected": name},
                )
                raise AlreadyInitializedError(current=self._name, rejected=name)
            self._name = name

        logger.debug("Application name initialized", extra={"app_name": name})

    def get(self) -> str:
        """Return the stored name, or the default when never set."""
        name = self._name
        return name if name is not None else self._default

    def is_set(self) -> bool:
        return self._name is not None

    def reset(self) -> None:
        """Forget the stored name. Only meant for test isolation."""
        with self._lock:
            self._name = None


_app_identity = AppIdentity()


def init(app_name: str) -> None:
    """Set the application name for the whole process.

    Safe to call from any thread and safe to never call. The first call wins;
    later calls raise and leave the stored name untouched.

    Args:
        app_name: Application name

    Raises:
        AlreadyInitializedError: If init() already succeeded once
    """
    _app_identity.set(app_name)


def get_app_name() -> str:
    """Get the application name, falling back to DEFAULT_APP_NAME."""
    return _app_identity.get()


def is_initialized() -> bool:
    """Whether init() has succeeded in this process."""
    return _app_identity.is_set()


def get_app_identity() -> AppIdentity:
    """Get the process-wide identity cell."""
    return _app_identity
