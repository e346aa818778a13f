"""Erros do modelo de domínio (models e factories)."""

from __future__ import annotations

UNDEFINED_MODEL_TYPE = 10800


class ModelError(Exception):
    """Erro base de criação/população de models."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class InvalidModelPropertiesError(ModelError, TypeError):
    """Propriedades iniciais não são um mapping."""


class InvalidCollectionError(ModelError, ValueError):
    """Coleção de registros não é um mapping nem uma sequência."""


class UnknownModelTypeError(ModelError):
    """Tipo de model não registrado na factory."""

    def __init__(self, model_type: str) -> None:
        super().__init__(
            f"Tipo de model indefinido, {model_type}. "
            "O model não pode ser criado pela factory.",
            code=UNDEFINED_MODEL_TYPE,
        )
        self.model_type = model_type


class ModelPropertyWarning(UserWarning):
    """Escrita ou remoção de propriedade não declarada no schema do model."""
