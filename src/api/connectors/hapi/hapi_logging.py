"""Helpers de logging para o hAPI (sem credenciais)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from app.domain.model import to_wire_text

if TYPE_CHECKING:
    from app.protocols.telemetry import EventSinkProtocol

logger = logging.getLogger(__name__)

REDACTED = "*****"
SENSITIVE_PARAMS = frozenset({"password", "secret", "username"})

# Severidade do evento de erro de negócio do hAPI
HAPI_ERROR_SEVERITY = 501


def _leaf_name(key: str) -> str:
    # "user[auth][password]" -> "password"
    return key.rsplit("[", 1)[-1].rstrip("]")


def redact_params(params: Mapping[str, Any]) -> str:
    """Serializa parâmetros como "k=v k=v", mascarando credenciais.

    A comparação usa o último segmento da chave achatada, então
    `message[password]` também é mascarado.
    """
    parts = []
    for key, value in params.items():
        sensitive = _leaf_name(str(key)).lower() in SENSITIVE_PARAMS
        shown = REDACTED if sensitive else to_wire_text(value)
        parts.append(f"{key}={shown}")
    return " ".join(parts)


def log_hapi_error(
    *,
    method: str,
    version: str,
    response_format: str,
    code: int,
    error_message: str | None,
    params: Mapping[str, Any],
    event_sink: EventSinkProtocol | None = None,
) -> None:
    """Registra erro de negócio retornado pelo hAPI.

    Vai sempre para o logger do módulo e, se houver, para o sink de eventos.
    """
    context = {
        "error_message": error_message,
        "method": method,
        "version": version,
        "format": response_format,
        "code": code,
        "params": redact_params(params),
    }
    logger.warning("hapi_error", extra=context)
    if event_sink is not None:
        event_sink.add_context_field("hapi_context", context)
        event_sink.emit("hAPI Error", HAPI_ERROR_SEVERITY, "hapi_error")


def log_call(
    event_sink: EventSinkProtocol | None,
    message: str,
    category: str,
    fields: Mapping[str, Any],
) -> None:
    """Emite evento de requisição/resposta do cliente com os campos dados."""
    logger.debug(category, extra=dict(fields))
    if event_sink is None:
        return
    for name, value in fields.items():
        event_sink.add_context_field(name, value)
    event_sink.emit(message, 0, category)
