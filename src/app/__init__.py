"""App - domínio, infraestrutura e wiring do cliente hAPI.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: models com schema fixo e suas factories
- infra/: implementações concretas (criptografia)
- protocols/: contratos/interfaces (transporte, telemetria)
- observability/: request_id e sink de eventos sobre logging

Padrão: app modela e conecta; api fala com o hAPI; config configura.
"""
