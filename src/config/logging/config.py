"""Instala o handler JSON único no root logger.

Credenciais (secret, password, chaves hAPI) nunca devem ir para `extra`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import RequestIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "hapi_client"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    request_id_getter: Callable[[], str] | None = None,
) -> None:
    """Troca os handlers do root por um StreamHandler JSON.

    Chamadas repetidas não duplicam saída.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        request_id_getter: Função opcional que retorna o request_id
            da chamada hAPI corrente (ex: app.observability.get_request_id).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(RequestIdFilter(service_name, request_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Atalho para logging.getLogger."""
    return logging.getLogger(name)
