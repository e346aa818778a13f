"""Tipos nomeados de resposta do hAPI."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AuthkeyResponse(BaseModel):
    """Par de credenciais de sessão retornado por hapi.authkeys.read."""

    model_config = ConfigDict(extra="allow")

    key: str
    secret: str
