"""Testes para config.logging.

Cobre: configure_logging, get_logger, RequestIdFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    RequestIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "msg", name: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Configura logging com nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_debug_level(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_case_insensitive(self) -> None:
        """Nível aceita minúsculas."""
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        """configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_request_id_filter(self) -> None:
        configure_logging(request_id_getter=lambda: "req-1")
        handler = logging.getLogger().handlers[0]
        assert any(isinstance(f, RequestIdFilter) for f in handler.filters)

    def test_valid_log_levels_constant(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS

    def test_default_service_name_constant(self) -> None:
        assert DEFAULT_SERVICE_NAME == "hapi_client"


class TestGetLogger:
    """Testes para get_logger."""

    def test_get_logger_returns_named_logger(self) -> None:
        logger = get_logger("api.connectors.hapi.client")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "api.connectors.hapi.client"

    def test_get_logger_same_name_returns_same_instance(self) -> None:
        assert get_logger("same.module") is get_logger("same.module")


class TestRequestIdFilter:
    """Testes para RequestIdFilter."""

    def test_filter_adds_request_id_from_getter(self) -> None:
        filter_ = RequestIdFilter("my_service", lambda: "req-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.request_id == "req-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_request_id(self) -> None:
        """request_id passado via extra é preservado."""
        filter_ = RequestIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.request_id = "explicit-id"
        filter_.filter(record)
        assert record.request_id == "explicit-id"

    def test_filter_uses_empty_string_without_getter(self) -> None:
        filter_ = RequestIdFilter("service_name")
        record = _record()
        filter_.filter(record)
        assert record.request_id == ""
        assert record.service == "service_name"


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_log_fields_content(self) -> None:
        expected = {"asctime", "levelname", "name", "message", "request_id", "service"}
        assert expected == REQUIRED_LOG_FIELDS

    def test_field_rename_map_content(self) -> None:
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_create_json_formatter_returns_formatter(self) -> None:
        from pythonjsonlogger.json import JsonFormatter

        assert isinstance(create_json_formatter(), JsonFormatter)

    def test_json_formatter_renames_fields(self) -> None:
        """Saída é JSON com level/logger renomeados."""
        record = _record("hapi_error", name="api.connectors.hapi")
        record.request_id = "abc-123"
        record.service = "hapi_client"
        payload = json.loads(create_json_formatter().format(record))
        assert payload["message"] == "hapi_error"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "api.connectors.hapi"
        assert payload["request_id"] == "abc-123"


class TestLoggingIntegration:
    """Testes de integração do sistema de logging."""

    def test_full_logging_flow(self) -> None:
        """Fluxo completo: configure, get_logger, log com extra."""
        configure_logging(
            level="DEBUG",
            service_name="integration_test",
            request_id_getter=lambda: "int-test-001",
        )
        logger = get_logger("integration.test")
        logger.debug("hapi_client_request", extra={"method_name": "test.echo"})
        logger.warning("hapi_error", extra={"code": 42, "error_message": "nope"})
