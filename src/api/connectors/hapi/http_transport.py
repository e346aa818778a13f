"""Transporte HTTP do hAPI sobre httpx (síncrono, sem retries)."""

from __future__ import annotations

import logging
import ssl
from collections.abc import Mapping, Sequence

import httpx

from api.connectors.hapi.errors import TransportError
from app.protocols.transport import TlsOptions, TransportResponse

logger = logging.getLogger(__name__)

_TLS_VERSIONS: dict[str, ssl.TLSVersion] = {
    "TLSv1": ssl.TLSVersion.TLSv1,
    "TLSv1_1": ssl.TLSVersion.TLSv1_1,
    "TLSv1_2": ssl.TLSVersion.TLSv1_2,
    "TLSv1_3": ssl.TLSVersion.TLSv1_3,
}


def build_ssl_context(tls_options: TlsOptions) -> ssl.SSLContext:
    """Cria o SSLContext equivalente às opções de TLS.

    Raises:
        TransportError: Se a versão de TLS é desconhecida
    """
    context = ssl.create_default_context()
    if tls_options.tls_version:
        try:
            context.minimum_version = _TLS_VERSIONS[tls_options.tls_version]
        except KeyError:
            raise TransportError(
                f"Versão de TLS não suportada: {tls_options.tls_version}"
            ) from None
    if not tls_options.verify_host or not tls_options.verify_peer:
        context.check_hostname = False
    if not tls_options.verify_peer:
        context.verify_mode = ssl.CERT_NONE
    return context


def format_header_block(response: httpx.Response) -> str:
    """Reconstrói o bloco bruto de headers ("Nome: valor" por linha)."""
    lines = [f"HTTP/1.1 {response.status_code} {response.reason_phrase}".rstrip()]
    for name, value in response.headers.raw:
        lines.append(f"{name.decode('latin-1')}: {value.decode('latin-1')}")
    return "\r\n".join(lines) + "\r\n"


class HttpxTransport:
    """Implementa HapiTransportProtocol com httpx.Client.

    Args:
        timeout_seconds: Timeout total da requisição
        client_transport: Transporte httpx alternativo (ex: MockTransport)
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._client_transport = client_transport

    def send(
        self,
        url: str,
        headers: Sequence[tuple[str, str]],
        body: Mapping[str, str] | bytes,
        tls_options: TlsOptions,
    ) -> TransportResponse:
        """Envia POST ao hAPI e devolve status, headers e corpo.

        Raises:
            TransportError: Falha de rede, DNS, TLS ou timeout
        """
        content = body if isinstance(body, bytes) else None
        data = None if isinstance(body, bytes) else dict(body)
        try:
            with httpx.Client(
                verify=build_ssl_context(tls_options),
                timeout=self._timeout_seconds,
                transport=self._client_transport,
            ) as client:
                response = client.post(url, headers=list(headers), data=data, content=content)
        except httpx.HTTPError as exc:
            logger.warning(
                "hapi_transport_error",
                extra={"error_type": type(exc).__name__},
            )
            raise TransportError(f"Falha de transporte ao chamar o hAPI: {exc}") from exc

        return TransportResponse(
            status_code=response.status_code,
            headers=format_header_block(response),
            body=response.content,
        )
