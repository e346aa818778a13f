"""Protocolos e contratos de colaboradores externos do cliente hAPI."""

from .telemetry import EventSinkProtocol
from .transport import HapiTransportProtocol, TlsOptions, TransportResponse

__all__ = [
    "EventSinkProtocol",
    "HapiTransportProtocol",
    "TlsOptions",
    "TransportResponse",
]
