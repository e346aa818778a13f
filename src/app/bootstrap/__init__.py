"""Bootstrap do cliente hAPI - inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, create_hapi_client

    # Na inicialização da aplicação
    initialize_app()

    client = create_hapi_client()
    client.client_id = 1234
    contacts = client.call_method("users.contacts.list")
"""

from __future__ import annotations

import logging
import os

from app.bootstrap.hapi_factory import create_hapi_client, create_method_registry
from app.observability import get_request_id
from config.logging import configure_logging
from config.settings import get_hapi_settings

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)

__all__ = [
    "create_hapi_client",
    "create_method_registry",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]


def initialize_app() -> None:
    """Configura logging JSON com request_id a partir das settings."""
    settings = get_hapi_settings()
    configure_logging(
        level=settings.log_level.upper(),
        service_name=settings.service_name,
        request_id_getter=get_request_id,
    )


def initialize_test_app() -> None:
    """Inicializa logging em nível DEBUG para testes."""
    settings = get_hapi_settings()
    configure_logging(
        level="DEBUG",
        service_name=f"{settings.service_name}_test",
        request_id_getter=get_request_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development`/`test` mantém alerta sem bloquear execução local.
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors = [f"hapi: {error}" for error in get_hapi_settings().validate()]

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
