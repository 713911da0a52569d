"""Environment-driven logging settings."""
import logging
import sys
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.sessionlog.context import LoggingConfig, configure
from src.sessionlog.identity import init
from src.sessionlog.sinks import NullSink, Sink, StreamSink, stdout_sink

logger = logging.getLogger(__name__)

_STREAMS = ("stdout", "stderr", "null")


class LogSettings(BaseSettings):
    """Logging settings loaded from ``SESSIONLOG_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SESSIONLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: Optional[str] = Field(
        default=None,
        description="Application name emitted as 'app' (default name when unset)"
    )
    stream: str = Field(
        default="stdout",
        description="Destination of log lines: stdout, stderr or null"
    )

    @field_validator("app_name")
    @classmethod
    def validate_app_name(cls, v: Optional[str]) -> Optional[str]:
        """Validate app name is not blank if set."""
        if v is not None and not v.strip():
            raise ValueError("app_name must not be blank")
        return v

    @field_validator("stream")
    @classmethod
    def validate_stream(cls, v: str) -> str:
        """Validate stream is one of the known destinations."""
        v = v.lower()
        if v not in _STREAMS:
            raise ValueError(f"stream must be one of {', '.join(_STREAMS)}")
        return v


def build_sink(stream: str) -> Sink:
    if stream == "stderr":
        return StreamSink(sys.stderr)
    if stream == "null":
        return NullSink()
    return stdout_sink


def build_config(settings: LogSettings) -> LoggingConfig:
    """Build a LoggingConfig with the sink named by ``settings.stream``."""
    return LoggingConfig(sink=build_sink(settings.stream))


def init_from_settings(settings: Optional[LogSettings] = None) -> LogSettings:
    """Initialize the app name and configure the calling unit from settings.

    Args:
        settings: Settings to apply; loaded from the environment when omitted

    Returns:
        The applied settings

    Raises:
        AlreadyInitializedError: If app_name is set and init() already ran
    """
    settings = settings or LogSettings()
    if settings.app_name is not None:
        init(settings.app_name)
    configure(build_config(settings))

    logger.debug(
        "Logging initialized from settings",
        extra={"app_name": settings.app_name, "stream": settings.stream},
    )
    return settings
