"""Constantes criptográficas do header de identidade do hAPI."""

AES_KEY_SIZE = 16  # aes-128-cbc
IV_SIZE = 16  # bloco AES
BLOCK_SIZE_BITS = 128
