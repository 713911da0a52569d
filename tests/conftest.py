"""Root pytest configuration."""
from datetime import datetime, timezone

import pytest

from src.sessionlog.context import LoggingConfig, configure, reset_context
from src.sessionlog.identity import get_app_identity
from src.sessionlog.testing import CollectingSink, fixed_clock


FIXED_INSTANT = datetime(2014, 7, 8, 9, 10, 11, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_logging():
    """Start every test without app name and with a default context."""
    get_app_identity().reset()
    reset_context()
    yield
    get_app_identity().reset()
    reset_context()


@pytest.fixture
def sink() -> CollectingSink:
    """Collecting sink installed with a clock fixed at FIXED_INSTANT."""
    collecting = CollectingSink()
    configure(LoggingConfig(clock=fixed_clock(FIXED_INSTANT), sink=collecting))
    return collecting
