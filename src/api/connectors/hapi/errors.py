"""Erros do conector hAPI.

Faixas de código:
    >= 10000 problema grave
    <  10000 importante, mas comum
"""

from __future__ import annotations

from enum import IntEnum


class HapiErrorCode(IntEnum):
    """Códigos numéricos carregados pelas exceções do conector."""

    # >= 10000 problema grave
    CURL_ERROR = 10000
    MODEL_NOT_INSTANTIATED = 10001
    BAD_HTTP_STATUS = 10200
    BAD_JSON_RESPONSE = 10300
    ACTION_NOT_ALLOWED = 10911
    NO_CLIENT_ID_SPECIFIED = 10912

    # < 10000 importante, mas comum
    JSON_MISSING_STATUS = 6600
    JSON_MISSING_ERROR_INFO = 6601
    JSON_MISSING_ERROR_MSG = 6602
    JSON_MISSING_RESPONSE_INFO = 6603
    NO_RESPONSE_MADE_TO_HAPI = 6604
    NO_RESPONSE_HEADER_SET = 6605
    HEADER_MISSING_STATUS = 6606
    HEADER_MISSING_ERROR_INFO = 6607
    HEADER_MISSING_ERROR_MSG = 6608
    HEADER_MISSING_VALUE = 6609

    HAPI_AUTHENTICATION_ERROR = 7500
    HAPI_INVALID_USER = 7501
    TOO_MANY_LOGIN_ATTEMPTS = 7502
    HAPI_UNEXPECTED_RESPONSE = 7503
    METHOD_PARSING_ERROR = 7700

    MISSING_REQUIRED_METHOD_PARAM = 8800
    INVALID_METHOD_PARAM = 8801
    UNKNOWN_METHOD_KEY = 8803


class HapiError(Exception):
    """Erro base do conector, sempre com código numérico."""

    default_code: int = 0

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = self.default_code if code is None else code


# ──────────────────────────────────────────────────────────────────────────────
# Transporte
# ──────────────────────────────────────────────────────────────────────────────


class TransportError(HapiError):
    """Falha de rede/DNS/TLS; nunca é retentada pelo cliente."""

    default_code = HapiErrorCode.CURL_ERROR


class HttpStatusError(HapiError):
    """Status HTTP diferente de 200 não aceito pelo método."""

    default_code = HapiErrorCode.BAD_HTTP_STATUS

    def __init__(self, message: str, status_code: int, code: int | None = None) -> None:
        super().__init__(message, code)
        self.status_code = status_code


# ──────────────────────────────────────────────────────────────────────────────
# Métodos (descritores de requisição)
# ──────────────────────────────────────────────────────────────────────────────


class MethodError(HapiError):
    """Erro de construção do método ou de contrato da resposta do hAPI."""

    default_code = HapiErrorCode.HAPI_UNEXPECTED_RESPONSE


class MalformedResponseError(MethodError):
    default_code = HapiErrorCode.BAD_JSON_RESPONSE


class MissingStatusError(MethodError):
    default_code = HapiErrorCode.JSON_MISSING_STATUS


class MissingErrorInfoError(MethodError):
    default_code = HapiErrorCode.JSON_MISSING_ERROR_INFO


class MissingErrorMessageError(MethodError):
    default_code = HapiErrorCode.JSON_MISSING_ERROR_MSG


class NoResponseMadeError(MethodError):
    default_code = HapiErrorCode.NO_RESPONSE_MADE_TO_HAPI


class NoResponseHeaderSetError(MethodError):
    default_code = HapiErrorCode.NO_RESPONSE_HEADER_SET


class MissingHeaderValueError(MethodError):
    default_code = HapiErrorCode.HEADER_MISSING_VALUE


class MissingRequiredParameterError(MethodError):
    default_code = HapiErrorCode.MISSING_REQUIRED_METHOD_PARAM


class InvalidParameterError(MethodError):
    default_code = HapiErrorCode.INVALID_METHOD_PARAM


class ActionNotAllowedError(MethodError):
    default_code = HapiErrorCode.ACTION_NOT_ALLOWED


class UnknownMethodKeyError(MethodError):
    default_code = HapiErrorCode.UNKNOWN_METHOD_KEY


class MethodParsingError(MethodError):
    default_code = HapiErrorCode.METHOD_PARSING_ERROR


class ModelNotInstantiatedError(MethodError):
    default_code = HapiErrorCode.MODEL_NOT_INSTANTIATED


class Non200NotAcceptedError(MethodError):
    """Método não aceita respostas diferentes de 200 OK."""


# ──────────────────────────────────────────────────────────────────────────────
# Cliente
# ──────────────────────────────────────────────────────────────────────────────


class HapiClientError(HapiError):
    """Erro de nível do cliente; carrega código e mensagem da causa original."""


class NoClientIdSpecifiedError(HapiClientError):
    default_code = HapiErrorCode.NO_CLIENT_ID_SPECIFIED


class AuthenticationError(HapiClientError):
    """hAPI rejeitou as credenciais (código 1 com mensagem de autenticação)."""

    default_code = HapiErrorCode.HAPI_AUTHENTICATION_ERROR


class InvalidUserError(AuthenticationError):
    default_code = HapiErrorCode.HAPI_INVALID_USER


class TooManyAttemptsError(AuthenticationError):
    default_code = HapiErrorCode.TOO_MANY_LOGIN_ATTEMPTS


class AuthenticationFailedError(AuthenticationError):
    """Falha de autenticação sem classificação específica."""


def classify_authentication_error(message: str) -> AuthenticationError:
    """Escolhe a subclasse de AuthenticationError pela mensagem do hAPI."""
    text = f"Hapi reported {message}"
    if "invalid username" in message:
        return InvalidUserError(text)
    if "too many login attempts" in message:
        return TooManyAttemptsError(text)
    return AuthenticationFailedError(text)
