"""Encoding of log events into single-line JSON documents.

Wire format (keys in this order, optional keys omitted when absent)::

    {"app": ..., "data": {<app>: ...}, "error": "...", "level": "INFO",
     "message": "...", "sessionid": "<uuid>", "timestamp": "...Z"}

The required order is alphabetical, so documents are dumped with sorted keys.
That also makes nested payload maps deterministic.
"""
import json
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic_core import to_jsonable_python

from src.sessionlog.context import LoggingContext
from src.sessionlog.exceptions import LogEncodingError
from src.sessionlog.identity import get_app_name
from src.sessionlog.models import LogEvent


def format_timestamp(value: datetime) -> str:
    """Format an instant as RFC 3339 UTC with exactly millisecond precision.

    Sub-millisecond digits are truncated. Naive datetimes are taken as UTC.

    Example:
        2016-07-25T17:22:40.835692+00:00 -> "2016-07-25T17:22:40.835Z"
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _render_unknown(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json_value(value: Any) -> Any:
    """Render a payload to a JSON-compatible value, nested values included.

    Pydantic models, dataclasses, datetimes and UUIDs are rendered by
    pydantic; other objects exposing ``to_dict()`` render themselves. Anything
    else raises.
    """
    return to_jsonable_python(value, fallback=_render_unknown)


def render_error(err: Any) -> str:
    """Debug rendering of an error value."""
    return repr(err)


def encode(event: LogEvent, ctx: LoggingContext) -> str:
    """Encode one event against a context snapshot.

    Pure apart from reading the clock of ``ctx`` and the process-wide app
    name; never touches the sink.

    Args:
        event: Event to encode
        ctx: Context snapshot providing clock and session ID

    Returns:
        Compact single-line JSON text

    Raises:
        LogEncodingError: If the payload has no JSON rendering
    """
    app_name = get_app_name()

    document: Dict[str, Any] = {"app": app_name}
    if event.has_error:
        document["error"] = render_error(event.error)
    document["level"] = event.level.value
    document["message"] = event.message
    document["sessionid"] = str(ctx.session_id)
    document["timestamp"] = format_timestamp(ctx.clock())

    try:
        if event.has_data:
            document["data"] = {app_name: to_json_value(event.data)}
        return json.dumps(
            document,
            ensure_ascii=False,
            separators=(",", ":"),
            sort_keys=True,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise LogEncodingError(
            message="Log payload is not JSON-serializable",
            payload_type=type(event.data).__name__,
        ) from e
