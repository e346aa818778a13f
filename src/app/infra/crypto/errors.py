"""Erros de criptografia do header de identidade."""


class IdentityCryptoError(Exception):
    """Erro em operação criptográfica do header de identidade."""
