"""Registro chave -> classe de método do hAPI."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from api.connectors.hapi.errors import UnknownMethodKeyError
from api.connectors.hapi.methods import (
    AbstractMethod,
    AuthkeysListMethod,
    AuthkeysReadMethod,
    EchoMethod,
    UsersContactsListMethod,
)
from config.settings import DEFAULT_APPLICATION_NAME

if TYPE_CHECKING:
    from app.domain.factory import CollectionFactory, ModelFactory
    from app.protocols.telemetry import EventSinkProtocol

DEFAULT_METHOD_MAP: Mapping[str, type[AbstractMethod]] = MappingProxyType(
    {
        "hapi.authkeys.list": AuthkeysListMethod,
        "hapi.authkeys.read": AuthkeysReadMethod,
        "users.contacts.list": UsersContactsListMethod,
        "test.echo": EchoMethod,
    }
)


class MethodRegistry:
    """Instancia métodos por chave, injetando factories e sink de eventos."""

    def __init__(
        self,
        model_factory: ModelFactory,
        collection_factory: CollectionFactory,
        event_sink: EventSinkProtocol | None = None,
        *,
        method_map: Mapping[str, type[AbstractMethod]] | None = None,
        application_name: str = DEFAULT_APPLICATION_NAME,
    ) -> None:
        self._model_factory = model_factory
        self._collection_factory = collection_factory
        self._event_sink = event_sink
        self._method_map = MappingProxyType(
            dict(DEFAULT_METHOD_MAP if method_map is None else method_map)
        )
        self._application_name = application_name

    @property
    def method_keys(self) -> tuple[str, ...]:
        return tuple(self._method_map)

    def get(self, method_key: str, options: Mapping[str, Any] | None = None) -> AbstractMethod:
        """Cria o método registrado em `method_key` com as opções dadas.

        Raises:
            UnknownMethodKeyError: Se a chave não está registrada
            MethodError: Se a construção do método falhar
        """
        try:
            method_cls = self._method_map[method_key]
        except KeyError:
            raise UnknownMethodKeyError(
                f'Chave de método inexistente, "{method_key}". Não é possível iniciar o método.'
            ) from None

        method = method_cls(
            options or {},
            self._event_sink,
            application_name=self._application_name,
        )
        return method.bind_factories(self._model_factory, self._collection_factory)
