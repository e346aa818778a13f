"""Connectors por serviço remoto.

Estrutura:
- hapi/: hAPI (cliente, métodos, registro, transporte httpx)

Cada serviço tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
