"""Testes para o header de identidade (AES-128-CBC)."""

from __future__ import annotations

import base64

import pytest

from app.infra.crypto import (
    AES_KEY_SIZE,
    IV_SIZE,
    IdentityCryptoError,
    build_identity,
    decrypt_identity,
    derive_key,
    encrypt_identity,
)

FIXED_IV = bytes(range(IV_SIZE))


def test_build_identity_client_only() -> None:
    assert build_identity(1001) == "1001"


def test_build_identity_with_contact() -> None:
    assert build_identity(1001, 7) == "1001-7"


def test_build_identity_ignores_empty_contact() -> None:
    assert build_identity(1001, 0) == "1001"
    assert build_identity(1001, None) == "1001"


def test_derive_key_pads_short_secret_with_nul() -> None:
    key = derive_key("abc")
    assert len(key) == AES_KEY_SIZE
    assert key == b"abc" + b"\x00" * 13


def test_derive_key_truncates_long_secret() -> None:
    assert derive_key("0123456789abcdefXYZ") == b"0123456789abcdef"


def test_encrypt_then_decrypt_with_tier_secret() -> None:
    encrypted = encrypt_identity("1001-7", "portal-secret")
    assert decrypt_identity(encrypted.ciphertext_b64, encrypted.iv_b64, "portal-secret") == "1001-7"


def test_fixed_iv_is_deterministic() -> None:
    first = encrypt_identity("1001", "secret", iv=FIXED_IV)
    second = encrypt_identity("1001", "secret", iv=FIXED_IV)
    assert first == second
    assert base64.b64decode(first.iv_b64) == FIXED_IV
    # "1001" cabe em um bloco com padding PKCS#7
    assert len(base64.b64decode(first.ciphertext_b64)) == 16


def test_random_iv_per_call() -> None:
    first = encrypt_identity("1001", "secret")
    second = encrypt_identity("1001", "secret")
    assert first.iv_b64 != second.iv_b64
    assert len(base64.b64decode(first.iv_b64)) == IV_SIZE


def test_block_aligned_identity_gets_full_padding_block() -> None:
    encrypted = encrypt_identity("1234567890123456", "secret", iv=FIXED_IV)
    assert len(base64.b64decode(encrypted.ciphertext_b64)) == 32


def test_empty_secret_raises() -> None:
    with pytest.raises(IdentityCryptoError, match="Secret obrigatório"):
        encrypt_identity("1001", "")


def test_invalid_iv_length_raises() -> None:
    with pytest.raises(IdentityCryptoError, match="IV"):
        encrypt_identity("1001", "secret", iv=b"short")


def test_decrypt_invalid_base64_raises() -> None:
    with pytest.raises(IdentityCryptoError):
        decrypt_identity("not base64!!", base64.b64encode(FIXED_IV).decode(), "secret")
