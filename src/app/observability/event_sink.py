"""Sink de eventos de telemetria sobre logging estruturado.

Campos são acumulados via add_context_field e emitidos (e limpos)
no próximo emit(), como `extra` do record.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

# Severidade usada pelo hAPI (0 = informativo; >= 500 = erro)
_ERROR_SEVERITY = 500
_WARNING_SEVERITY = 400


def severity_to_level(severity: int) -> int:
    """Mapeia o código de severidade do evento para nível de logging."""
    if severity >= _ERROR_SEVERITY:
        return logging.ERROR
    if severity >= _WARNING_SEVERITY:
        return logging.WARNING
    return logging.INFO


class LoggingEventSink:
    """Implementa EventSinkProtocol emitindo records de log.

    Args:
        target: Logger de destino (padrão: logger deste módulo)
    """

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger
        self._context: dict[str, Any] = {}
        self._trace = False

    def add_context_field(self, name: str, value: Any) -> None:
        self._context[name] = value

    def emit(self, message: str, severity: int, category: str) -> None:
        """Emite o evento com os campos acumulados e limpa o contexto."""
        extra = {**self._context, "event_category": category, "severity": severity}
        self._context = {}
        self._logger.log(
            severity_to_level(severity),
            message,
            extra=extra,
            stack_info=self._trace,
        )

    def enable_trace(self) -> None:
        self._trace = True

    def disable_trace(self) -> None:
        self._trace = False
