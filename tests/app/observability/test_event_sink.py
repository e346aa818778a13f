"""Testes para o sink de eventos e o request_id."""

from __future__ import annotations

import logging

import pytest

from app.observability import (
    LoggingEventSink,
    get_request_id,
    reset_request_id,
    set_request_id,
    severity_to_level,
)


@pytest.mark.parametrize(
    ("severity", "level"),
    [(0, logging.INFO), (400, logging.WARNING), (501, logging.ERROR)],
)
def test_severity_to_level(severity: int, level: int) -> None:
    assert severity_to_level(severity) == level


def test_emit_logs_fields_and_clears_context(caplog: pytest.LogCaptureFixture) -> None:
    target = logging.getLogger("tests.event_sink")
    caplog.set_level(logging.INFO, logger="tests.event_sink")
    sink = LoggingEventSink(target)

    sink.add_context_field("method_name", "test.echo")
    sink.emit("hAPI client request", 0, "hapi_client_request")
    sink.emit("second", 0, "other")

    first, second = caplog.records[-2:]
    assert first.getMessage() == "hAPI client request"
    assert first.method_name == "test.echo"
    assert first.event_category == "hapi_client_request"
    assert not hasattr(second, "method_name")


def test_error_severity_logs_error(caplog: pytest.LogCaptureFixture) -> None:
    target = logging.getLogger("tests.event_sink.error")
    caplog.set_level(logging.INFO, logger="tests.event_sink.error")
    LoggingEventSink(target).emit("hAPI Error", 501, "hapi_error")
    assert caplog.records[-1].levelno == logging.ERROR


def test_trace_adds_stack_info(caplog: pytest.LogCaptureFixture) -> None:
    target = logging.getLogger("tests.event_sink.trace")
    caplog.set_level(logging.INFO, logger="tests.event_sink.trace")
    sink = LoggingEventSink(target)
    sink.enable_trace()
    sink.emit("traced", 0, "trace")
    sink.disable_trace()
    sink.emit("plain", 0, "trace")
    traced, plain = caplog.records[-2:]
    assert traced.stack_info
    assert not plain.stack_info


def test_request_id_context() -> None:
    assert get_request_id() == ""
    token = set_request_id("req-1")
    assert get_request_id() == "req-1"
    reset_request_id(token)
    assert get_request_id() == ""


def test_request_id_is_generated() -> None:
    token = set_request_id()
    try:
        assert len(get_request_id()) == 36
    finally:
        reset_request_id(token)
