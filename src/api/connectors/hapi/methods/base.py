"""AbstractMethod - descritor de requisição/resposta de um método do hAPI.

Cada método concreto declara nome, formato, versão do protocolo e regras de
parâmetros; a base monta os parâmetros, assina a URL e interpreta os
envelopes de resposta:

- json 1.5: {"response": {"status": "ok", "error": {"code", "message"}, ...}}
- json 1.0: {"attributes": {"stat": "ok"}, "err": {"attributes": {"code", "msg"}}}
- raw:      status em headers (X-Status / X-Error-Code), corpo opaco
- legacy:   {"@attributes": {"stat": "ok"}, "err": [{"code", "msg"}, ...]}

Erro de negócio ("hAPI disse não") não é exceção: fica registrado em
error_code/error_message e o cliente devolve {"error": mensagem}.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar
from urllib.parse import urlencode

from pydantic import BaseModel, ValidationError

from api.connectors.hapi.errors import (
    InvalidParameterError,
    MalformedResponseError,
    MissingErrorInfoError,
    MissingErrorMessageError,
    MissingHeaderValueError,
    MissingRequiredParameterError,
    MissingStatusError,
    ModelNotInstantiatedError,
    MethodParsingError,
    HapiErrorCode,
    Non200NotAcceptedError,
    NoResponseHeaderSetError,
    NoResponseMadeError,
    classify_authentication_error,
)
from api.connectors.hapi.hapi_logging import log_hapi_error
from api.connectors.hapi.headers import parse_header_block
from api.connectors.hapi.params import (
    CALLER_ID_ALIASES,
    flatten_params,
    resolve_caller_id,
    to_form_values,
)
from app.domain.errors import ModelError
from app.infra.crypto import compute_signature
from config.settings import DEFAULT_APPLICATION_NAME

if TYPE_CHECKING:
    from app.domain.factory import CollectionFactory, ModelFactory
    from app.domain.model import AbstractModel
    from app.protocols.telemetry import EventSinkProtocol

FORMAT_JSON = "json"
FORMAT_RAW = "raw"
FORMAT_LEGACY = "legacy"

VERSION_1_0 = "1.0"
VERSION_1_5 = "1.5"

STATUS_OK = "ok"
STATUS_HEADER = "X-Status"
ERROR_CODE_HEADER = "X-Error-Code"

# hAPI devolve código 0 em erros reais
NORMALIZED_ZERO_CODE = -999

SERVER_LIST_UNAVAILABLE_CODE = 11000
SERVER_LIST_UNAVAILABLE_MESSAGE = "The server list is currently unavailable."

AUTH_ERROR_CODE = 1
_AUTH_EXACT_MESSAGE = "Invalid login or password"
_AUTH_MESSAGE_FRAGMENTS = ("invalid username", "too many login attempts")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def iso8601_timestamp() -> str:
    """Timestamp no formato esperado pelo hAPI (ex: 2013-03-05T21:14:16+0000)."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S%z")


def to_error_code(value: Any) -> int:
    """Converte código de erro vindo do wire em int (texto não numérico -> 0)."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def is_authentication_message(message: str) -> bool:
    return message == _AUTH_EXACT_MESSAGE or any(
        fragment in message for fragment in _AUTH_MESSAGE_FRAGMENTS
    )


class AbstractMethod:
    """Base de todos os métodos do hAPI.

    Instância efêmera: uma por chamada, descartada após o cliente retornar.
    """

    method_name: ClassVar[str] = ""
    response_format: ClassVar[str] = FORMAT_JSON
    version: ClassVar[str] = VERSION_1_5
    protocol: ClassVar[str] = "https://"

    # Exige credenciais de admin para assinar
    admin_only: ClassVar[bool] = True
    # Envia username:password (Basic) e não assina a URL
    is_auth_request: ClassVar[bool] = False
    requires_encoding: ClassVar[bool] = False
    encoding_format: ClassVar[str] = "gzip,deflate"

    required_params: ClassVar[tuple[str, ...]] = ()
    optional_params: ClassVar[tuple[str, ...]] = ()
    # Aplicados antes das opções do chamador (podem ser sobrescritos)
    static_params: ClassVar[Mapping[str, Any]] = {}

    # Classe pydantic para embrulhar a resposta; None = estrutura bruta
    response_type: ClassVar[type[BaseModel] | None] = None

    raw_error_message: ClassVar[str] = (
        "File id must be invalid, as no file information was returned"
    )

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        event_sink: EventSinkProtocol | None = None,
        *,
        application_name: str = DEFAULT_APPLICATION_NAME,
    ) -> None:
        self._event_sink = event_sink
        self.application_name = application_name

        self.post_data: dict[str, Any] = dict(self.static_params)
        self.client_id: Any = 0
        self.auth_string = ""

        self.error_code = 0
        self.error_message: str | None = None
        self.http_status_code: int | None = None

        self.model_factory: ModelFactory | None = None
        self.collection_factory: CollectionFactory | None = None

        self._response: Any = None
        self._has_response = False
        self._headers: dict[str, str] | None = None

        self._assemble_params(dict(options or {}))

    # ──────────────────────────────────────────────────────────────────────
    # Parâmetros e URL
    # ──────────────────────────────────────────────────────────────────────

    def _assemble_params(self, options: dict[str, Any]) -> None:
        caller_id = resolve_caller_id(options)
        for param in (*self.required_params, *self.optional_params):
            if param in CALLER_ID_ALIASES:
                if caller_id is not None:
                    self.post_data[param] = caller_id
                    self.client_id = caller_id
                    continue
            elif options.get(param) is not None:
                self.post_data[param] = options[param]
                continue

            if param in self.required_params and self.post_data.get(param) is None:
                raise MissingRequiredParameterError(f"Parâmetro obrigatório ausente: {param}")

    def bind_factories(
        self,
        model_factory: ModelFactory,
        collection_factory: CollectionFactory,
    ) -> AbstractMethod:
        self.model_factory = model_factory
        self.collection_factory = collection_factory
        return self

    def query_params(self) -> dict[str, Any]:
        """Parâmetros estáticos da query string."""
        return {"method": self.method_name, "format": self.response_format}

    def get_url(self, endpoint: str, key: str | None, secret: str | None) -> str:
        """URL completa do método, incluindo query assinada.

        Raises:
            InvalidParameterError: Se endpoint, key ou secret vazios
        """
        if not endpoint:
            raise InvalidParameterError("Endpoint obrigatório para a URL")

        return f"{self.protocol}{endpoint}/version/{self.version}/?{self._build_query(key, secret)}"

    def _build_query(self, key: str | None, secret: str | None) -> str:
        if not key:
            raise InvalidParameterError("Chave de autorização obrigatória para o cliente")
        if not secret:
            raise InvalidParameterError("Secret de autorização obrigatório para o cliente")

        query = self.query_params()
        query["key"] = key
        query["timestamp"] = iso8601_timestamp()

        # Em conflito de chave, o valor da query prevalece
        signed = {**to_form_values(self.get_post_data()), **to_form_values(query)}
        query["api_sig"] = compute_signature(secret, signed)

        return urlencode(to_form_values(query))

    def get_post_data(self) -> dict[str, Any]:
        """Parâmetros do corpo, achatados em chaves `pai[filho]`."""
        if not self.post_data:
            return {}
        return flatten_params(self.post_data)

    def get_auth(self) -> str:
        """Texto username:password para métodos de autenticação."""
        return self.auth_string

    def get_method_name(self, extended: bool = True) -> str:
        """Nome do método; com `extended`, sufixo ::as_admin em métodos admin."""
        if extended and self.admin_only:
            return f"{self.method_name}::as_admin"
        return self.method_name

    def is_portal_method(self) -> bool:
        return self.method_name.split(".", 1)[0] == "portal"

    # ──────────────────────────────────────────────────────────────────────
    # Resposta
    # ──────────────────────────────────────────────────────────────────────

    @property
    def format_kind(self) -> str:
        """json, raw ou legacy (qualquer outro formato declarado)."""
        if self.response_format in (FORMAT_JSON, FORMAT_RAW):
            return self.response_format
        return FORMAT_LEGACY

    def set_response(self, body: bytes | str, header: str) -> None:
        """Interpreta a resposta 200 do hAPI.

        Raises:
            MalformedResponseError: Corpo vazio ou não decodificável
            MissingStatusError / MissingErrorInfoError / MissingErrorMessageError:
                hAPI violou o próprio contrato
            AuthenticationError: Erro de autenticação reportado pelo hAPI
        """
        self._headers = {
            name.lower(): value for name, value in parse_header_block(header or "").items()
        }
        data = self._decode_body(body)
        if not self._check_response_status(data):
            return
        if self.format_kind == FORMAT_JSON and self.version == VERSION_1_5:
            data = data.get("response", data)
        self.build_response(data)

    def build_response(self, data: Any) -> None:
        """Constrói o resultado a partir do payload; métodos concretos sobrescrevem."""
        self.create_response(data)

    def _decode_body(self, body: bytes | str) -> Any:
        if self.format_kind == FORMAT_RAW:
            return body
        try:
            data = json.loads(body)
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError(
                "Resposta do hAPI não é um JSON válido."
            ) from exc
        if not data or not isinstance(data, Mapping):
            raise MalformedResponseError("Resposta do hAPI não é um JSON válido.")
        return data

    def get_response(self) -> Any:
        return self._response

    def is_success(self) -> bool:
        """A comunicação com o hAPI teve sucesso?

        Raises:
            NoResponseMadeError: Nenhuma resposta foi registrada ainda
        """
        if self.error_code != 0:
            return False
        if not self._has_response:
            raise NoResponseMadeError("Nenhuma requisição foi feita ao hAPI")
        return True

    def handles_http_code(self, http_code: int) -> bool:
        """Métodos que aceitam status != 200 sobrescrevem."""
        return False

    def set_non_200_response(self, http_code: int, body: bytes | str) -> None:
        raise Non200NotAcceptedError("Este método não aceita respostas diferentes de 200 OK.")

    def get_header_value(self, name: str) -> str:
        """Valor de um header da resposta (busca sem diferenciar caixa).

        Raises:
            NoResponseHeaderSetError: Headers ainda não foram parseados
            MissingHeaderValueError: Header ausente
        """
        if self._headers is None:
            raise NoResponseHeaderSetError("Os headers da resposta ainda não foram definidos.")
        try:
            return self._headers[name.lower()]
        except KeyError:
            raise MissingHeaderValueError(
                f'Header de resposta do hAPI ausente ou inválido, "{name}".'
            ) from None

    # ──────────────────────────────────────────────────────────────────────
    # Status por formato
    # ──────────────────────────────────────────────────────────────────────

    def _check_response_status(self, data: Any) -> bool:
        kind = self.format_kind
        if kind == FORMAT_JSON:
            if self.version == VERSION_1_5:
                ok = self._check_json_v15(data)
            else:
                ok = self._check_json_v10(data)
        elif kind == FORMAT_RAW:
            ok = self._check_raw_headers()
        else:
            ok = self._check_legacy(data)

        if self.error_code == SERVER_LIST_UNAVAILABLE_CODE:
            # mensagem real já foi logada
            self.error_message = SERVER_LIST_UNAVAILABLE_MESSAGE
        return ok

    def _check_json_v15(self, data: Mapping[str, Any]) -> bool:
        response = data.get("response")
        if not isinstance(response, Mapping) or response.get("status") is None:
            raise MissingStatusError(
                "Sem status na resposta do hAPI. Faltando 'response' ou 'status'."
            )
        if response["status"] == STATUS_OK:
            return True

        error = response.get("error")
        if not isinstance(error, Mapping):
            raise MissingErrorInfoError(
                "Status da resposta do hAPI é falha, mas não há informação de erro."
            )
        self._record_error(error.get("code"), error.get("message"))
        return False

    def _check_json_v10(self, data: Mapping[str, Any]) -> bool:
        attributes = data.get("attributes")
        if not isinstance(attributes, Mapping) or attributes.get("stat") is None:
            raise MissingStatusError(
                "Sem status na resposta do hAPI. Faltando 'attributes' ou 'stat'."
            )
        if attributes["stat"] == STATUS_OK:
            return True

        err = data.get("err")
        error = err.get("attributes") if isinstance(err, Mapping) else None
        if not error or not isinstance(error, Mapping):
            raise MissingErrorInfoError(
                "Status da resposta do hAPI é falha, mas não há informação de erro."
            )
        self._record_error(error.get("code"), error.get("msg"))
        return False

    def _check_raw_headers(self) -> bool:
        status = self._headers.get(STATUS_HEADER.lower()) if self._headers else None
        if not status:
            raise MissingStatusError(
                f"Sem status no header da resposta do hAPI. Faltando '{STATUS_HEADER}'.",
                code=HapiErrorCode.HEADER_MISSING_STATUS,
            )
        if status == STATUS_OK:
            return True

        raw_code = self._headers.get(ERROR_CODE_HEADER.lower(), "") if self._headers else ""
        if raw_code == "":
            raise MissingErrorInfoError(
                "Status da resposta do hAPI é falha, mas não há informação de erro.",
                code=HapiErrorCode.HEADER_MISSING_ERROR_INFO,
            )
        self.error_code = to_error_code(raw_code) or NORMALIZED_ZERO_CODE
        self.error_message = self.raw_error_message
        self._log_hapi_error()
        return False

    def _check_legacy(self, data: Mapping[str, Any]) -> bool:
        attributes = data.get("@attributes")
        if not isinstance(attributes, Mapping) or attributes.get("stat") is None:
            raise MissingStatusError("Sem status na resposta do hAPI. Faltando 'stat'.")
        if attributes["stat"] == STATUS_OK:
            return True

        errors = data.get("err")
        if isinstance(errors, Mapping):
            errors = [errors]
        if not errors or not isinstance(errors, list):
            raise MissingErrorInfoError(
                "Status da resposta do hAPI é falha, mas não há informação de erro."
            )
        # prevalece o último erro da lista
        for record in errors:
            if not isinstance(record, Mapping):
                raise MissingErrorMessageError(
                    "Status da resposta do hAPI é falha, mas o erro não tem código/mensagem."
                )
            self._record_error(_legacy_code(record.get("code")), record.get("msg"))
        return False

    def _record_error(self, code: Any, message: Any) -> None:
        if code is None or message is None:
            raise MissingErrorMessageError(
                "Status da resposta do hAPI é falha, mas o erro não tem código/mensagem."
            )
        message = str(message)
        numeric = to_error_code(code)
        if numeric == AUTH_ERROR_CODE and is_authentication_message(message):
            raise classify_authentication_error(message)

        self.error_code = numeric or NORMALIZED_ZERO_CODE
        self.error_message = message
        self._log_hapi_error()

    def _log_hapi_error(self) -> None:
        log_hapi_error(
            method=self.get_method_name(),
            version=self.version,
            response_format=self.response_format,
            code=self.error_code,
            error_message=self.error_message,
            params=self.get_post_data(),
            event_sink=self._event_sink,
        )

    # ──────────────────────────────────────────────────────────────────────
    # Construção do resultado
    # ──────────────────────────────────────────────────────────────────────

    def _store_response(self, response: Any) -> None:
        self._response = response
        self._has_response = True

    def create_response(
        self, data: Any, response_type: type[BaseModel] | None = None
    ) -> None:
        """Guarda `data` bruto ou embrulhado na classe de resposta declarada."""
        response_type = response_type or self.response_type
        if response_type is None:
            self._store_response(data)
            return
        try:
            self._store_response(response_type.model_validate(data))
        except ValidationError as exc:
            raise MethodParsingError(
                f"Resposta inválida do hAPI para {self.method_name}: "
                f"{exc.error_count()} erro(s) de validação"
            ) from exc

    def set_response_model(self, model_type: str, data: Mapping[str, Any]) -> None:
        self._store_response(self._create_model(model_type, data))

    def set_response_collection(self, model_type: str, records: Any) -> None:
        self._store_response(self._create_collection(model_type, records))

    def _create_model(self, model_type: str, data: Mapping[str, Any]) -> AbstractModel:
        model_factory, _ = self._require_factories(model_type)
        try:
            properties = model_factory.convert_to_model_properties(model_type, data)
            return model_factory.create(model_type, properties)
        except ModelError:
            raise
        except Exception as exc:
            raise ModelNotInstantiatedError(
                f"Model {model_type} não pôde ser instanciado. Erro: {exc}"
            ) from exc

    def _create_collection(self, model_type: str, records: Any) -> Any:
        model_factory, collection_factory = self._require_factories(model_type)
        try:
            if isinstance(records, Mapping):
                hydrated: Any = {
                    key: model_factory.convert_to_model_properties(model_type, record)
                    for key, record in records.items()
                }
            elif isinstance(records, (list, tuple)):
                hydrated = [
                    model_factory.convert_to_model_properties(model_type, record)
                    for record in records
                ]
            else:
                hydrated = records
            return collection_factory.create(model_type, hydrated)
        except ModelError:
            raise
        except Exception as exc:
            raise ModelNotInstantiatedError(
                f"Coleção de {model_type} não pôde ser instanciada. Erro: {exc}"
            ) from exc

    def _require_factories(self, model_type: str) -> tuple[ModelFactory, CollectionFactory]:
        if self.model_factory is None or self.collection_factory is None:
            raise ModelNotInstantiatedError(
                f"Factories não configuradas; model {model_type} não pode ser criado."
            )
        return self.model_factory, self.collection_factory


def _legacy_code(value: Any) -> Any:
    """Código no formato legado pode vir como [{"#text": "42"}]."""
    if isinstance(value, list) and value and isinstance(value[0], Mapping):
        return value[0].get("#text")
    return value
