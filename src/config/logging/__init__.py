"""Logging JSON do cliente hAPI.

A aplicação chama `configure_logging` uma vez (ver app.bootstrap); os
módulos do cliente usam `logging.getLogger(__name__)` com eventos em
snake_case e campos em `extra`. Cada linha sai com request_id e service
preenchidos pelo `RequestIdFilter`.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import RequestIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "RequestIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
