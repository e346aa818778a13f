"""API - camada de borda com serviços remotos.

Responsabilidades:
- Montar e assinar requisições para APIs externas
- Interpretar envelopes de resposta e classificar erros
- Isolar a biblioteca HTTP atrás de um protocolo de transporte

Subpastas:
- connectors/: adapters por serviço remoto

NÃO PODE conter: regras de models, configuração global de logging.
"""
