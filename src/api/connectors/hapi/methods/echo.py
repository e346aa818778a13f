"""test.echo - devolve os parâmetros enviados (diagnóstico de conectividade)."""

from __future__ import annotations

from api.connectors.hapi.methods.base import AbstractMethod


class EchoMethod(AbstractMethod):
    method_name = "test.echo"
    admin_only = False
    optional_params = ("message",)
