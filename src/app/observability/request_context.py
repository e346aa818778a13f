"""request_id da chamada hAPI corrente.

Usa ContextVar para ser thread/async-safe; injetado nos logs pelo
RequestIdFilter.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_request_id: ContextVar[str] = ContextVar("hapi_request_id", default="")


def get_request_id() -> str:
    """Retorna o request_id do contexto atual (vazio fora de uma chamada)."""
    return _request_id.get()


def set_request_id(request_id: str | None = None) -> Token[str]:
    """Define o request_id; se None, gera um novo UUID."""
    return _request_id.set(request_id or str(uuid.uuid4()))


def reset_request_id(token: Token[str]) -> None:
    _request_id.reset(token)
