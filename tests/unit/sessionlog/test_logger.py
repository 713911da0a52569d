"""Unit tests for the info/data/error entry points."""
import json
import uuid
from dataclasses import dataclass

import pytest

from src.sessionlog import (
    AlreadyInitializedError,
    LoggingConfig,
    clear_session,
    configure,
    data,
    enter_session,
    error,
    info,
    init,
    new_session,
)
from src.sessionlog.identity import DEFAULT_APP_NAME
from src.sessionlog.testing import CollectingSink

NIL = "00000000-0000-0000-0000-000000000000"


def test_logging_without_session(sink):
    """Should emit the exact golden line when no session is active."""
    init("dbc-rust-modules")

    info("test logging without session")

    assert sink.last == (
        '{"app":"dbc-rust-modules","level":"INFO",'
        '"message":"test logging without session",'
        '"sessionid":"00000000-0000-0000-0000-000000000000",'
        '"timestamp":"2014-07-08T09:10:11.000Z"}'
    )


def test_logging_with_session(sink):
    """Should emit the entered session ID."""
    init("dbc-rust-modules")
    session_id = new_session()

    info("test logging with session")

    assert sink.records() == [{
        "app": "dbc-rust-modules",
        "level": "INFO",
        "message": "test logging with session",
        "sessionid": str(session_id),
        "timestamp": "2014-07-08T09:10:11.000Z",
    }]


@pytest.mark.parametrize("message", ["", "plain", "quote \" and \\ slash", "ünïcödé ✓", "line\nbreak"])
def test_info_has_only_base_keys(sink, message):
    """Should emit message verbatim without data or error keys."""
    info(message)

    record = json.loads(sink.last)
    assert list(record) == ["app", "level", "message", "sessionid", "timestamp"]
    assert record["message"] == message
    assert record["sessionid"] == NIL
    assert "\n" not in sink.last


def test_info_falls_back_to_default_app_name(sink):
    """Should use the default app name when init() was never called."""
    info("hello")

    assert sink.records()[0]["app"] == DEFAULT_APP_NAME


def test_data_nests_payload_under_app_name(sink):
    """Should namespace the payload under the app name."""
    init("myapp")

    data("payload", {"x": 1})

    assert '"data":{"myapp":{"x":1}}' in sink.last
    record = sink.records()[0]
    assert list(record) == ["app", "data", "level", "message", "sessionid", "timestamp"]
    assert record["level"] == "INFO"


def test_data_with_none_payload(sink):
    """Should emit an explicit null payload."""
    init("myapp")

    data("nothing", None)

    assert sink.records()[0]["data"] == {"myapp": None}


def test_data_renders_dataclass_payload(sink):
    """Should render dataclass payloads as objects."""
    @dataclass
    class Point:
        x: int
        y: int

    init("geo")
    data("point", Point(1, 2))

    assert sink.records()[0]["data"] == {"geo": {"x": 1, "y": 2}}


def test_error_renders_debug_text(sink):
    """Should emit the error's repr as a string at ERROR level."""
    error("failed", ValueError("bad input"))

    record = sink.records()[0]
    assert list(record) == ["app", "error", "level", "message", "sessionid", "timestamp"]
    assert record["level"] == "ERROR"
    assert record["error"] == "ValueError('bad input')"


def test_calls_are_emitted_in_order(sink):
    """Should call the sink once per log call, in call order."""
    info("one")
    error("two", RuntimeError("x"))
    data("three", [1, 2, 3])

    assert [r["message"] for r in sink.records()] == ["one", "two", "three"]


def test_sink_errors_propagate():
    """Should not suppress failures raised by the sink."""
    def broken_sink(line):
        raise BrokenPipeError("closed")

    configure(LoggingConfig(sink=broken_sink))

    with pytest.raises(BrokenPipeError):
        info("lost")


def test_configure_resets_entered_session(sink):
    """Should log the nil session after reconfiguring."""
    enter_session("3f2b8c1e-7d4a-4e2b-9c1f-0a1b2c3d4e5f")

    other = CollectingSink()
    configure(LoggingConfig(sink=other))
    info("after configure")

    assert other.records()[0]["sessionid"] == NIL
    assert sink.lines == []


def test_default_sink_prints_one_line(capsys):
    """Should write one line to stdout with the default config."""
    info("to stdout")

    out = capsys.readouterr().out
    assert out.count("\n") == 1
    assert json.loads(out)["message"] == "to stdout"


def test_entered_session_is_emitted_until_cleared(sink):
    """Should emit the entered session until it is cleared."""
    session_id = uuid.uuid4()

    enter_session(session_id)
    info("inside")
    info("still inside")
    clear_session()
    info("outside")

    assert [r["sessionid"] for r in sink.records()] == [
        str(session_id),
        str(session_id),
        NIL,
    ]


def test_core_errors_render_as_payload(sink):
    """Should render logging core errors through their to_dict()."""
    init("billing")
    try:
        init("shipping")
    except AlreadyInitializedError as e:
        data("init rejected", e)

    assert sink.records()[0]["data"] == {
        "billing": {
            "error_code": "ALREADY_INITIALIZED",
            "message": "Application name already initialized as 'billing'",
            "details": {"current": "billing", "rejected": "shipping"},
            "exception_type": "AlreadyInitializedError",
        }
    }
