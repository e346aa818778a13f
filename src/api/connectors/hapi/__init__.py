"""Conector do hAPI.

Uso:
    from api.connectors.hapi import HapiClient, MethodRegistry, HttpxTransport
"""

from .client import NULL_IDENTITY_METHODS, HapiClient, HapiCredentials
from .errors import (
    AuthenticationError,
    HapiClientError,
    HapiError,
    HapiErrorCode,
    HttpStatusError,
    MethodError,
    NoClientIdSpecifiedError,
    TransportError,
)
from .http_transport import HttpxTransport
from .registry import DEFAULT_METHOD_MAP, MethodRegistry
from .response_types import AuthkeyResponse

__all__ = [
    "DEFAULT_METHOD_MAP",
    "NULL_IDENTITY_METHODS",
    "AuthenticationError",
    "AuthkeyResponse",
    "HapiClient",
    "HapiClientError",
    "HapiCredentials",
    "HapiError",
    "HapiErrorCode",
    "HttpStatusError",
    "HttpxTransport",
    "MethodError",
    "MethodRegistry",
    "NoClientIdSpecifiedError",
    "TransportError",
]
