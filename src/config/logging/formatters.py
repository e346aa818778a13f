"""Formatters de logging estruturado (JSON)."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "request_id",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """JsonFormatter com level/logger renomeados.

    Linha típica de uma chamada ao hAPI:
        {
            "asctime": "2026-02-02T10:30:00",
            "level": "INFO",
            "logger": "api.connectors.hapi.client",
            "message": "hAPI client request",
            "request_id": "abc-123",
            "service": "hapi_client"
        }
    """
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
