"""AbstractModel - registro com schema fixo vindo de respostas do hAPI.

Cada model concreto declara `_defaults` (chaves válidas + valores padrão)
e, opcionalmente, `_hydrator` (campo do wire -> chave do model). O conjunto
de chaves nunca cresce nem encolhe em tempo de execução.
"""

from __future__ import annotations

import copy
import logging
import pickle
import warnings
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from html.entities import codepoint2name
from typing import Any, ClassVar

from app.domain.errors import InvalidModelPropertiesError, ModelPropertyWarning

logger = logging.getLogger(__name__)

# Retornado ao ler uma chave não declarada
EMPTY = ""

_SCALAR_TYPES = (str, int, float, bool, type(None))


def to_wire_text(value: Any) -> str:
    """Converte escalar para texto como o hAPI espera (True -> "1", None -> "")."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def html_entities(value: Any) -> str:
    """Escapa &, <, > e caracteres com entidade HTML nomeada; aspas duplas ficam."""
    text = to_wire_text(value)
    escaped: list[str] = []
    for char in text:
        name = codepoint2name.get(ord(char))
        if name is None or char == '"':
            escaped.append(char)
        else:
            escaped.append(f"&{name};")
    return "".join(escaped)


def _escape_values(value: Mapping[Any, Any] | list[Any] | tuple[Any, ...]) -> Any:
    """Escapa recursivamente apenas strings (chaves e valores)."""
    if isinstance(value, Mapping):
        escaped: dict[Any, Any] = {}
        for key, data in value.items():
            secure_key = html_entities(key) if isinstance(key, str) else key
            escaped[secure_key] = _escape_item(data)
        return escaped
    return [_escape_item(data) for data in value]


def _escape_item(data: Any) -> Any:
    if isinstance(data, (Mapping, list, tuple)):
        return _escape_values(data)
    if isinstance(data, str):
        return html_entities(data)
    return data


class AbstractModel:
    """Model base com escrita validada contra o schema declarado.

    Subclasses definem:
        _defaults: chaves válidas e valores padrão
        _hydrator: mapa campo-do-wire -> chave do model (usado só na importação)
    """

    _defaults: ClassVar[Mapping[str, Any]] = {}
    _hydrator: ClassVar[Mapping[str, str]] = {}

    def __init__(self, properties: Mapping[str, Any] | None = None, silent: bool = False) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(self._defaults))
        if properties is None:
            return
        if not isinstance(properties, Mapping):
            raise InvalidModelPropertiesError(
                "Tipo inválido para properties na inicialização do model: "
                f"{type(properties).__name__}"
            )
        for key, value in properties.items():
            self._set(key, value, silent)

    @classmethod
    def hydrate(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        """Projeta um payload do hAPI nas chaves do model via `_hydrator`.

        Campos do payload ausentes do hydrator são descartados.
        Sem hydrator declarado, loga e retorna mapping vazio.
        """
        if not cls._hydrator:
            logger.warning(
                "model_hydrator_undefined",
                extra={"model": cls.__name__},
            )
            return {}

        return {
            prop: data[wire_name]
            for wire_name, prop in cls._hydrator.items()
            if wire_name in data
        }

    def load(self, data: Mapping[str, Any], scrub: bool = False) -> AbstractModel:
        """Mescla `data` no model; `scrub` descarta chaves inválidas sem aviso."""
        for key, value in data.items():
            self._set(key, value, scrub)
        return self

    def get(self, key: str, escape: bool = True) -> Any:
        """Retorna o valor de `key`, escapado para HTML por padrão.

        Chave não declarada retorna EMPTY e gera evento de diagnóstico.
        """
        if key not in self._data:
            logger.warning(
                "model_invalid_property",
                extra={
                    "calling_class": type(self).__name__,
                    "key": key,
                    "escape": escape,
                },
                stack_info=True,
            )
            return EMPTY

        value = self._data[key]
        if not escape:
            return value
        if isinstance(value, (Mapping, list, tuple)):
            return _escape_values(value)
        if isinstance(value, _SCALAR_TYPES):
            return html_entities(value)
        return value

    def set(self, key: str, value: Any) -> AbstractModel:
        self._set(key, value)
        return self

    def remove(self, key: str) -> None:
        """Esvazia o valor de `key`; a chave continua no schema."""
        if key not in self._data:
            warnings.warn(
                f'Tentativa de remover propriedade inválida do model, "{key}".',
                ModelPropertyWarning,
                stacklevel=2,
            )
            return
        self._data[key] = None

    def count(self) -> int:
        return len(self._data)

    def to_mapping(self) -> dict[str, Any]:
        """Cópia do mapa interno, sem escape; alterá-la não muda o model."""
        return copy.deepcopy(self._data)

    def get_date(self, key: str, fmt: str) -> Any:
        """Formata `key` (unix timestamp ou ISO-8601) com strftime.

        Valores vazios são retornados sem alteração.
        """
        value = self.get(key, escape=False)
        if not value:
            return value
        if isinstance(value, (int, float)) or (isinstance(value, str) and value.isdigit()):
            moment = datetime.fromtimestamp(int(value), tz=UTC)
        else:
            moment = datetime.fromisoformat(str(value))
        return moment.strftime(fmt)

    def serialize(self) -> bytes:
        return pickle.dumps(self._data)

    def deserialize(self, payload: bytes) -> None:
        """Restaura o mapping interno; não revalida contra o schema."""
        self._data = pickle.loads(payload)

    def _set(self, key: str, value: Any, silent: bool = False) -> None:
        if key in self._data:
            self._data[key] = value
            return
        if not silent:
            warnings.warn(
                f'Tentativa de definir propriedade inválida do model, "{key}".',
                ModelPropertyWarning,
                stacklevel=3,
            )

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._set(key, value)

    def __delitem__(self, key: str) -> None:
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return self._data.get(key) is not None  # type: ignore[call-overload]

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._data)} properties)"
