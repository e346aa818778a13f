"""Descritores de métodos do hAPI."""

from .base import (
    FORMAT_JSON,
    FORMAT_LEGACY,
    FORMAT_RAW,
    VERSION_1_0,
    VERSION_1_5,
    AbstractMethod,
)
from .echo import EchoMethod
from .hapi_authkeys import AuthkeysListMethod, AuthkeysReadMethod
from .users_contacts import UsersContactsListMethod

__all__ = [
    "FORMAT_JSON",
    "FORMAT_LEGACY",
    "FORMAT_RAW",
    "VERSION_1_0",
    "VERSION_1_5",
    "AbstractMethod",
    "AuthkeysListMethod",
    "AuthkeysReadMethod",
    "EchoMethod",
    "UsersContactsListMethod",
]
