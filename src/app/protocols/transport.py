"""Protocolo de transporte HTTP usado pelo cliente hAPI.

O core não conhece a biblioteca HTTP; apenas este contrato.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class TlsOptions:
    """Opções de TLS repassadas ao transporte.

    Attributes:
        tls_version: Versão mínima (ex: "TLSv1_2"); None = padrão do ssl
        verify_peer: Validar certificado do servidor
        verify_host: Validar hostname do certificado
    """

    tls_version: str | None = None
    verify_peer: bool = True
    verify_host: bool = True


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Resposta bruta: status HTTP, bloco de headers e corpo."""

    status_code: int
    headers: str
    body: bytes


class HapiTransportProtocol(Protocol):
    """Contrato mínimo do transporte.

    Falhas de rede/DNS/TLS devem levantar
    api.connectors.hapi.errors.TransportError.
    """

    def send(
        self,
        url: str,
        headers: Sequence[tuple[str, str]],
        body: Mapping[str, str] | bytes,
        tls_options: TlsOptions,
    ) -> TransportResponse: ...
