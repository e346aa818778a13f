"""Assinatura (api_sig) das requisições ao hAPI.

api_sig = md5(secret + k1 + v1 + k2 + v2 ...) com parâmetros ordenados
pela chave. O algoritmo é imposto pelo serviço remoto.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping


def compute_signature(secret: str, params: Mapping[str, str]) -> str:
    """Calcula a assinatura determinística de `params` com `secret`.

    Args:
        secret: Secret da credencial usada na chamada
        params: Parâmetros de query + post já achatados e convertidos em texto

    Returns:
        Digest md5 em hexadecimal
    """
    payload = secret + "".join(f"{key}{params[key]}" for key in sorted(params))
    return hashlib.md5(payload.encode("utf-8")).hexdigest()  # noqa: S324
