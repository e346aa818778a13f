"""Criptografia do header de identidade (impersonação) do hAPI.

O hAPI espera o formato do OpenSSL para aes128 (saída em base64):
- AES-128-CBC com padding PKCS#7
- chave = secret truncado/completado com NUL até 16 bytes
- ciphertext em base64; IV transmitido em base64 em header separado
"""

from __future__ import annotations

import base64
import binascii
import os
from dataclasses import dataclass

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .constants import AES_KEY_SIZE, BLOCK_SIZE_BITS, IV_SIZE
from .errors import IdentityCryptoError


@dataclass(frozen=True, slots=True)
class EncryptedIdentity:
    """Identidade criptografada pronta para os headers."""

    ciphertext_b64: str
    iv_b64: str


def build_identity(client_id: object, contact_id: object | None = None) -> str:
    """Monta o texto da identidade: "clientId" ou "clientId-contactId"."""
    identity = str(client_id)
    if contact_id:
        identity = f"{identity}-{contact_id}"
    return identity


def derive_key(secret: str) -> bytes:
    """Chave AES a partir do secret, como o OpenSSL faz para aes128."""
    raw = secret.encode("utf-8")
    return raw[:AES_KEY_SIZE].ljust(AES_KEY_SIZE, b"\x00")


def encrypt_identity(identity: str, secret: str, iv: bytes | None = None) -> EncryptedIdentity:
    """Criptografa a identidade com o secret do nível (admin ou portal).

    Args:
        identity: Texto da identidade (ver build_identity)
        secret: Secret do nível de credencial
        iv: IV explícito (testes); por padrão um IV aleatório novo

    Raises:
        IdentityCryptoError: Se secret vazio ou IV de tamanho inválido
    """
    if not secret:
        raise IdentityCryptoError("Secret obrigatório para criptografar a identidade")

    iv = os.urandom(IV_SIZE) if iv is None else iv
    if len(iv) != IV_SIZE:
        raise IdentityCryptoError(f"Tamanho de IV inválido: {len(iv)}")

    padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
    padded = padder.update(identity.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(derive_key(secret)), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    return EncryptedIdentity(
        ciphertext_b64=base64.b64encode(ciphertext).decode("ascii"),
        iv_b64=base64.b64encode(iv).decode("ascii"),
    )


def decrypt_identity(ciphertext_b64: str, iv_b64: str, secret: str) -> str:
    """Operação inversa (lado do hAPI); usada em diagnósticos e testes."""
    try:
        ciphertext = base64.b64decode(ciphertext_b64, validate=True)
        iv = base64.b64decode(iv_b64, validate=True)
        decryptor = Cipher(algorithms.AES(derive_key(secret)), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return plaintext.decode("utf-8")
    except (ValueError, binascii.Error) as exc:
        raise IdentityCryptoError(f"Falha ao descriptografar identidade: {exc}") from exc
