"""Settings do cliente hAPI.

Endpoint, credenciais (admin e portal) e opções de TLS.
Carregadas de variáveis de ambiente HAPI_*; o core recebe tudo via
construtor, sem estado global.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_USER_AGENT: str = "Portal hAPI Python Client"
DEFAULT_APPLICATION_NAME: str = "portal"
PORTAL_REFERENCE_APPLICATION: str = "portal-reference"

VALID_TLS_VERSIONS = frozenset({"TLSv1", "TLSv1_1", "TLSv1_2", "TLSv1_3"})


@dataclass(frozen=True)
class HapiSettings:
    """Configurações do cliente hAPI.

    Attributes:
        endpoint: Host/caminho do hAPI, sem esquema (ex: hapi.example.net/api)
        admin_key: Chave hAPI do admin
        admin_secret: Secret hAPI do admin
        portal_key: Chave hAPI do portal (nível de impersonação)
        portal_secret: Secret hAPI do portal
        tls_version: Versão mínima de TLS (ex: TLSv1_2); vazio = padrão do ssl
        verify_peer: Validar certificado do servidor
        verify_host: Validar hostname do certificado
        request_timeout_seconds: Timeout entregue ao transporte
        application_name: Nome da aplicação que usa o cliente
        user_agent: User-Agent enviado ao hAPI
        service_name: Nome do serviço para logs
        log_level: Nível de log padrão
    """

    endpoint: str = ""
    admin_key: str = ""
    admin_secret: str = ""
    portal_key: str = ""
    portal_secret: str = ""

    # TLS
    tls_version: str = ""
    verify_peer: bool = True
    verify_host: bool = True

    request_timeout_seconds: float = 30.0

    application_name: str = DEFAULT_APPLICATION_NAME
    user_agent: str = DEFAULT_USER_AGENT

    # Observabilidade
    service_name: str = "hapi_client"
    log_level: str = "INFO"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do cliente.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.endpoint:
            errors.append("HAPI_ENDPOINT não configurado")

        if "://" in self.endpoint:
            errors.append("HAPI_ENDPOINT não deve incluir o esquema (http/https)")

        if not self.admin_key or not self.admin_secret:
            errors.append("HAPI_ADMIN_KEY/HAPI_ADMIN_SECRET não configurados")

        if not self.portal_secret:
            errors.append("HAPI_PORTAL_SECRET não configurado")

        if self.tls_version and self.tls_version not in VALID_TLS_VERSIONS:
            errors.append(
                f"HAPI_TLS_VERSION inválida: {self.tls_version}. "
                f"Válidas: {', '.join(sorted(VALID_TLS_VERSIONS))}"
            )

        if self.request_timeout_seconds <= 0:
            errors.append("HAPI_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _parse_bool(raw: str, default: bool) -> bool:
    value = raw.strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


def _load_from_env() -> HapiSettings:
    """Carrega HapiSettings a partir de variáveis de ambiente."""
    return HapiSettings(
        endpoint=os.getenv("HAPI_ENDPOINT", ""),
        admin_key=os.getenv("HAPI_ADMIN_KEY", ""),
        admin_secret=os.getenv("HAPI_ADMIN_SECRET", ""),
        portal_key=os.getenv("HAPI_PORTAL_KEY", ""),
        portal_secret=os.getenv("HAPI_PORTAL_SECRET", ""),
        tls_version=os.getenv("HAPI_TLS_VERSION", ""),
        verify_peer=_parse_bool(os.getenv("HAPI_VERIFY_PEER", ""), True),
        verify_host=_parse_bool(os.getenv("HAPI_VERIFY_HOST", ""), True),
        request_timeout_seconds=float(os.getenv("HAPI_REQUEST_TIMEOUT_SECONDS", "30")),
        application_name=os.getenv("HAPI_APPLICATION_NAME", DEFAULT_APPLICATION_NAME),
        user_agent=os.getenv("HAPI_USER_AGENT", DEFAULT_USER_AGENT),
        service_name=os.getenv("HAPI_SERVICE_NAME", "hapi_client"),
        log_level=os.getenv("HAPI_LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_hapi_settings() -> HapiSettings:
    """Retorna instância cacheada de HapiSettings."""
    return _load_from_env()
