"""Montagem de parâmetros enviados ao hAPI."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domain.model import to_wire_text

# Aliases do id do cliente, em ordem de precedência
CALLER_ID_ALIASES: tuple[str, ...] = ("customer_id", "uber_client_id", "client_id")


def flatten_params(
    value: Mapping[Any, Any] | list[Any] | tuple[Any, ...],
    prefix: str | None = None,
    flat: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Achata estruturas aninhadas em chaves `pai[filho]` / `pai[0]`.

    Exemplo:
        {"a": {"b": [1, 2]}} -> {"a[b][0]": 1, "a[b][1]": 2}
    """
    flat = {} if flat is None else flat
    items = value.items() if isinstance(value, Mapping) else enumerate(value)
    for key, item in items:
        name = str(key) if prefix is None else f"{prefix}[{key}]"
        if isinstance(item, (Mapping, list, tuple)):
            flatten_params(item, name, flat)
        else:
            flat[name] = item
    return flat


def to_form_values(params: Mapping[str, Any]) -> dict[str, str]:
    """Converte valores achatados para texto (formato aceito pelo hAPI)."""
    return {key: to_wire_text(value) for key, value in params.items()}


def resolve_caller_id(options: Mapping[str, Any]) -> Any | None:
    """Retorna o id do cliente pelo primeiro alias presente, ou None."""
    for alias in CALLER_ID_ALIASES:
        if options.get(alias) is not None:
            return options[alias]
    return None
