"""Cliente do hAPI.

Responsabilidades:
- Escolher credenciais (admin ou sessão) e assinar a URL do método
- Injetar o header de identidade em chamadas impersonadas
- Delegar a requisição ao transporte e a interpretação ao método
- Devolver o resultado tipado ou {"error": mensagem} em erro de negócio

Estado de sessão (key/secret, client_id, contact_id, client_ip) é mutável e
lido no momento da chamada; uma instância por sessão lógica.
"""

from __future__ import annotations

import base64
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.connectors.hapi.errors import (
    HapiClientError,
    HttpStatusError,
    MethodError,
    NoClientIdSpecifiedError,
    TransportError,
)
from api.connectors.hapi.hapi_logging import log_call
from api.connectors.hapi.params import to_form_values
from app.infra.crypto import build_identity, encrypt_identity
from app.observability import get_request_id, reset_request_id, set_request_id
from app.protocols.transport import TlsOptions
from config.settings import DEFAULT_USER_AGENT

if TYPE_CHECKING:
    from api.connectors.hapi.methods import AbstractMethod
    from api.connectors.hapi.registry import MethodRegistry
    from app.protocols.telemetry import EventSinkProtocol
    from app.protocols.transport import HapiTransportProtocol

logger = logging.getLogger(__name__)

# Métodos que podem ser chamados sem client_id
NULL_IDENTITY_METHODS: frozenset[str] = frozenset(
    {
        "test.echo",
        "users.reset_password",
        "hapi.authkeys.read",
        "jobs.status",
        "cache.delete",
        "devices.update_faceplate_image",
    }
)

AUTH_METHOD_KEY = "hapi.authkeys.read"

ORIG_IP_HEADER = "X-Orig-IP"
ORIG_USER_HEADER = "X-Orig-User"
ORIG_USER_IV_HEADER = "X-Orig-User-IV"

HTTP_OK = 200


@dataclass(frozen=True)
class HapiCredentials:
    """Pares de credenciais do cliente: admin e portal (impersonação)."""

    admin_key: str
    admin_secret: str
    portal_key: str = ""
    portal_secret: str = ""


class HapiClient:
    """Cliente síncrono do hAPI.

    Args:
        endpoint: Host/caminho do hAPI, sem esquema
        method_registry: Registro de métodos
        credentials: Credenciais admin/portal
        transport: Implementação de HapiTransportProtocol
        event_sink: Sink de telemetria (opcional)
        tls: Opções de TLS repassadas ao transporte
        user_agent: User-Agent enviado ao hAPI
    """

    def __init__(
        self,
        endpoint: str,
        method_registry: MethodRegistry,
        credentials: HapiCredentials,
        transport: HapiTransportProtocol,
        event_sink: EventSinkProtocol | None = None,
        tls: TlsOptions | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._endpoint = endpoint
        self._method_registry = method_registry
        self._credentials = credentials
        self._transport = transport
        self._event_sink = event_sink
        self._tls = tls or TlsOptions()
        self._user_agent = user_agent

        # Sessão
        self.key: str | None = None
        self.secret: str | None = None
        self.client_id: Any = None
        self.contact_id: Any = None
        self.client_ip = ""

    def call_method(
        self,
        method_key: str,
        options: dict[str, Any] | None = None,
        admin_override: bool = False,
    ) -> Any:
        """Chama um método do hAPI.

        Args:
            method_key: Chave registrada no MethodRegistry
            options: Parâmetros do método
            admin_override: Não exige nem injeta client_id

        Returns:
            Resultado tipado do método ou {"error": mensagem}

        Raises:
            NoClientIdSpecifiedError: client_id ausente em método que o exige
            HapiClientError: Falha de transporte, status HTTP ou do método
            AuthenticationError: hAPI rejeitou as credenciais
            ModelError: Falha ao construir models da resposta
        """
        options = dict(options or {})
        if not self._has_client_id() and not admin_override:
            if method_key not in NULL_IDENTITY_METHODS:
                raise NoClientIdSpecifiedError("O client id não foi definido")
        elif "client_id" not in options and not admin_override:
            options["client_id"] = self.client_id

        token = set_request_id()
        try:
            method = self._build_method(method_key, options)
            return self._execute(method)
        finally:
            reset_request_id(token)

    def validate_credentials(self, username: str, password: str) -> Any:
        """Autentica username/password e guarda key/secret da sessão.

        Returns:
            AuthkeyResponse em sucesso ou {"error": mensagem}
        """
        token = set_request_id()
        try:
            method = self._build_method(
                AUTH_METHOD_KEY, {"username": username, "password": password}
            )
            result = self._execute(method)
        finally:
            reset_request_id(token)

        if isinstance(result, dict) and "error" in result:
            return result
        self.key = result.key
        self.secret = result.secret
        logger.info("hapi_session_established", extra={"hapi_key": self.key})
        return result

    # ──────────────────────────────────────────────────────────────────────
    # Internos
    # ──────────────────────────────────────────────────────────────────────

    def _has_client_id(self) -> bool:
        if self.client_id is None:
            return False
        try:
            return int(self.client_id) > 0
        except (TypeError, ValueError):
            return bool(self.client_id)

    def _build_method(self, method_key: str, options: dict[str, Any]) -> AbstractMethod:
        try:
            return self._method_registry.get(method_key, options)
        except MethodError as exc:
            raise HapiClientError(exc.message, exc.code) from exc

    def _execute(self, method: AbstractMethod) -> Any:
        started = time.perf_counter()
        fields = {
            "id": get_request_id(),
            "method_name": method.get_method_name(),
            "hapi_key": self.key,
        }
        log_call(self._event_sink, "hAPI client request", "hapi_client_request", fields)

        try:
            self._call_api(method)
            success = method.is_success()
        except (TransportError, HttpStatusError, MethodError) as exc:
            raise HapiClientError(exc.message, exc.code) from exc

        log_call(
            self._event_sink,
            "hAPI client response",
            "hapi_client_response",
            {**fields, "time_taken": time.perf_counter() - started},
        )

        if success:
            return method.get_response()
        return {"error": method.error_message}

    def _call_api(self, method: AbstractMethod) -> AbstractMethod:
        """Envia a requisição do método e entrega a resposta a ele.

        Raises:
            TransportError: Falha de rede/DNS/TLS
            HttpStatusError: Status != 200 não aceito pelo método
        """
        key, secret = self.key, self.secret
        if method.admin_only:
            key, secret = self._credentials.admin_key, self._credentials.admin_secret
        url = method.get_url(self._endpoint, key, secret)

        headers = [
            (ORIG_IP_HEADER, self.client_ip or ""),
            ("User-Agent", self._user_agent),
        ]
        if self._has_client_id() and not method.is_auth_request:
            headers.extend(self._identity_headers(method))
        if method.is_auth_request:
            token = base64.b64encode(method.get_auth().encode("utf-8")).decode("ascii")
            headers.append(("Authorization", f"Basic {token}"))
        if method.requires_encoding:
            headers.append(("Accept-Encoding", method.encoding_format))

        response = self._transport.send(
            url,
            headers,
            to_form_values(method.get_post_data()),
            self._tls,
        )
        method.http_status_code = response.status_code

        if response.status_code != HTTP_OK:
            if not method.handles_http_code(response.status_code):
                body = response.body.decode("utf-8", errors="replace")
                raise HttpStatusError(
                    f"Request failed. Http response code: {response.status_code}. Response: {body}",
                    status_code=response.status_code,
                )
            method.set_non_200_response(response.status_code, response.body)
        else:
            method.set_response(response.body, response.headers)
        return method

    def _identity_headers(self, method: AbstractMethod) -> list[tuple[str, str]]:
        if method.is_portal_method():
            secret = self._credentials.portal_secret
        else:
            secret = self._credentials.admin_secret
        encrypted = encrypt_identity(build_identity(self.client_id, self.contact_id), secret)
        return [
            (ORIG_USER_HEADER, encrypted.ciphertext_b64),
            (ORIG_USER_IV_HEADER, encrypted.iv_b64),
        ]