"""Observabilidade do cliente hAPI: request_id e sink de eventos.

Uso:
    from app.observability import LoggingEventSink, get_request_id
"""

from app.observability.event_sink import LoggingEventSink, severity_to_level
from app.observability.request_context import (
    get_request_id,
    reset_request_id,
    set_request_id,
)

__all__ = [
    "LoggingEventSink",
    "get_request_id",
    "reset_request_id",
    "set_request_id",
    "severity_to_level",
]
