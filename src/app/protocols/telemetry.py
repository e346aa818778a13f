"""Protocolo do sink de eventos de telemetria."""

from __future__ import annotations

from typing import Any, Protocol


class EventSinkProtocol(Protocol):
    """Acumula campos de contexto e os emite junto com um evento."""

    def add_context_field(self, name: str, value: Any) -> None: ...

    def emit(self, message: str, severity: int, category: str) -> None: ...

    def enable_trace(self) -> None: ...

    def disable_trace(self) -> None: ...
