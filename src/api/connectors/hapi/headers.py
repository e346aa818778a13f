"""Parse do bloco bruto de headers da resposta do hAPI.

Exemplo de bloco:
    HTTP/1.1 200 OK
    Date: Tue, 05 Mar 2013 21:14:16 GMT
    X-Status: ok
    Content-Type: application/json; charset=utf-8
"""

from __future__ import annotations


def parse_header_block(header: str) -> dict[str, str]:
    """Converte o bloco de headers em dict nome -> valor.

    Cada linha não vazia é dividida no primeiro ':'; valores com ':'
    (ex: Date) são preservados. Linhas sem ':' (status line) são ignoradas.
    """
    headers: dict[str, str] = {}
    for raw_line in header.split("\n"):
        line = raw_line.strip()
        if not line or ":" not in line:
            continue
        name, value = line.split(":", 1)
        headers[name.strip()] = value.strip()
    return headers
