"""Métodos hapi.authkeys.* (autenticação e listagem de chaves)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from api.connectors.hapi.errors import (
    ActionNotAllowedError,
    InvalidParameterError,
    MethodParsingError,
    MissingRequiredParameterError,
)
from api.connectors.hapi.methods.base import AbstractMethod
from api.connectors.hapi.params import to_form_values
from api.connectors.hapi.response_types import AuthkeyResponse
from config.settings import DEFAULT_APPLICATION_NAME, PORTAL_REFERENCE_APPLICATION

if TYPE_CHECKING:
    from app.protocols.telemetry import EventSinkProtocol


class AuthkeysReadMethod(AbstractMethod):
    """hapi.authkeys.read - autoriza username/password e devolve key/secret.

    Usa HTTP Basic; a URL não é assinada.
    """

    method_name = "hapi.authkeys.read"
    admin_only = False
    is_auth_request = True
    required_params = ("username", "password")
    response_type = AuthkeyResponse

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        event_sink: EventSinkProtocol | None = None,
        *,
        application_name: str = DEFAULT_APPLICATION_NAME,
    ) -> None:
        super().__init__(options, event_sink, application_name=application_name)
        self.auth_string = f"{self.post_data['username']}:{self.post_data['password']}"
        self.post_data["verbosity"] = "extended"

    def get_url(self, endpoint: str, key: str | None, secret: str | None) -> str:
        if not endpoint:
            raise InvalidParameterError("Endpoint obrigatório para a URL")
        query = urlencode(to_form_values(self.query_params()))
        return f"{self.protocol}{endpoint}/version/{self.version}/?{query}"

    def build_response(self, data: Any) -> None:
        authkey = data.get("authkey") if isinstance(data, Mapping) else None
        if authkey is None:
            raise MethodParsingError(
                "Resposta inválida do hAPI para este método: 'authkey' ausente."
            )
        self.create_response(authkey)


class AuthkeysListMethod(AbstractMethod):
    """hapi.authkeys.list - lista as chaves de um cliente.

    Restrito à aplicação portal-reference.
    """

    method_name = "hapi.authkeys.list"

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        event_sink: EventSinkProtocol | None = None,
        *,
        application_name: str = DEFAULT_APPLICATION_NAME,
    ) -> None:
        if application_name != PORTAL_REFERENCE_APPLICATION:
            raise ActionNotAllowedError("A ação que você está tentando não é permitida.")
        if not (options or {}).get("client_id"):
            raise MissingRequiredParameterError(
                "Informe o client_id para listar as authkeys."
            )
        super().__init__(options, event_sink, application_name=application_name)
        self.post_data = {"customer_id": options["client_id"]}
        self.client_id = options["client_id"]

    def build_response(self, data: Any) -> None:
        authkeys = data.get("authkeys") if isinstance(data, Mapping) else None
        self.create_response(authkeys or [])
