"""Test helpers: a recording sink and a fixed clock.

Example:
    sink = CollectingSink()
    configure(LoggingConfig(clock=fixed_clock(datetime(2014, 7, 8, 9, 10, 11)), sink=sink))
    info("hello")
    assert sink.records()[0]["message"] == "hello"
"""
import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional


class CollectingSink:
    """Sink keeping every line in memory."""

    def __init__(self):
        self.lines: List[str] = []
        self._lock = threading.Lock()

    def __call__(self, line: str) -> None:
        with self._lock:
            self.lines.append(line)

    @property
    def last(self) -> Optional[str]:
        """Most recent line, or None when nothing was logged."""
        return self.lines[-1] if self.lines else None

    def records(self) -> List[Dict[str, Any]]:
        """All lines parsed as JSON."""
        return [json.loads(line) for line in self.lines]

    def clear(self) -> None:
        with self._lock:
            self.lines.clear()


def fixed_clock(instant: datetime) -> Callable[[], datetime]:
    """Clock always returning ``instant`` (naive values are taken as UTC)."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    def clock() -> datetime:
        return instant

    return clock
