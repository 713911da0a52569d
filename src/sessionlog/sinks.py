"""Sinks: the final destination of every encoded log line.

A sink is any callable taking one JSON document as text. Sinks own delivery
concerns entirely; the emission path never retries or suppresses their errors.
"""
import logging
import threading
from typing import Callable, TextIO


Sink = Callable[[str], None]


def stdout_sink(line: str) -> None:
    """Default sink: write one line to standard output."""
    print(line)


class StreamSink:
    """Sink writing one line per call to a text stream.

    Each write happens under a lock so that several threads can share one
    sink without interleaving partial lines.

    Example:
        config = LoggingConfig(sink=StreamSink(sys.stderr))
    """

    def __init__(self, stream: TextIO, flush: bool = True):
        """Initialize stream sink.

        Args:
            stream: Text stream to write to
            flush: Flush the stream after every line
        """
        self.stream = stream
        self.flush = flush
        self._lock = threading.Lock()

    def __call__(self, line: str) -> None:
        with self._lock:
            self.stream.write(line + "\n")
            if self.flush:
                self.stream.flush()


class LoggerSink:
    """Sink forwarding each line to a stdlib logger.

    Useful when the application already routes ``logging`` output somewhere
    (files, collectors) and log lines should travel the same way.
    """

    def __init__(self, logger: logging.Logger, level: int = logging.INFO):
        """Initialize logger sink.

        Args:
            logger: Logger receiving the lines
            level: Level every line is logged at
        """
        self.logger = logger
        self.level = level

    def __call__(self, line: str) -> None:
        self.logger.log(self.level, line)


class NullSink:
    """Sink that drops all lines."""

    def __call__(self, line: str) -> None:
        pass
