"""Factories de models e coleções de models.

O registro tipo -> classe é passado no construtor (sem tabela global).
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from app.domain.contact import Contact
from app.domain.errors import InvalidCollectionError, UnknownModelTypeError
from app.domain.model import AbstractModel

DEFAULT_MODEL_TYPES: Mapping[str, type[AbstractModel]] = MappingProxyType(
    {
        "contact": Contact,
    }
)


class ModelFactory:
    """Cria models a partir de um nome simbólico de tipo."""

    def __init__(self, model_types: Mapping[str, type[AbstractModel]] | None = None) -> None:
        self._model_types = MappingProxyType(
            dict(DEFAULT_MODEL_TYPES if model_types is None else model_types)
        )

    @property
    def model_types(self) -> Mapping[str, type[AbstractModel]]:
        return self._model_types

    def create(
        self,
        model_type: str,
        properties: Mapping[str, Any] | None = None,
        silent: bool = True,
    ) -> AbstractModel:
        """Cria e popula um model.

        Raises:
            UnknownModelTypeError: Se model_type não está registrado
        """
        return self._resolve(model_type)(properties, silent)

    def convert_to_model_properties(
        self, model_type: str, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Converte payload do hAPI em propriedades do model (hydrator)."""
        return self._resolve(model_type).hydrate(data)

    def _resolve(self, model_type: str) -> type[AbstractModel]:
        try:
            return self._model_types[model_type]
        except KeyError:
            raise UnknownModelTypeError(model_type) from None


class CollectionFactory:
    """Aplica a ModelFactory a cada registro, preservando as chaves."""

    def __init__(self, model_factory: ModelFactory) -> None:
        self._model_factory = model_factory

    def create(
        self,
        model_type: str,
        records: Mapping[Any, Mapping[str, Any]] | list[Mapping[str, Any]] | tuple[Mapping[str, Any], ...],
        silent: bool = True,
    ) -> dict[Any, AbstractModel] | list[AbstractModel]:
        """Retorna a coleção de models no mesmo formato recebido.

        Mapping -> dict com as mesmas chaves; lista/tupla -> lista na mesma ordem.

        Raises:
            InvalidCollectionError: Se records não é mapping nem sequência
        """
        if isinstance(records, Mapping):
            return {
                key: self._build(model_type, properties, silent)
                for key, properties in records.items()
            }
        if isinstance(records, (list, tuple)):
            return [self._build(model_type, properties, silent) for properties in records]
        raise InvalidCollectionError(
            "O segundo parâmetro deve ser uma coleção de mappings de propriedades."
        )

    def _build(
        self, model_type: str, properties: Mapping[str, Any], silent: bool
    ) -> AbstractModel:
        return self._model_factory.create(model_type).load(properties, silent)
