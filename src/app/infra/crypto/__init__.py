"""Criptografia do cliente hAPI.

- Assinatura md5 (api_sig) das requisições
- Header de identidade AES-128-CBC para chamadas impersonadas
"""

from .constants import AES_KEY_SIZE, IV_SIZE
from .errors import IdentityCryptoError
from .identity_header import (
    EncryptedIdentity,
    build_identity,
    decrypt_identity,
    derive_key,
    encrypt_identity,
)
from .signature import compute_signature

__all__ = [
    "AES_KEY_SIZE",
    "IV_SIZE",
    "EncryptedIdentity",
    "IdentityCryptoError",
    "build_identity",
    "compute_signature",
    "decrypt_identity",
    "derive_key",
    "encrypt_identity",
]
