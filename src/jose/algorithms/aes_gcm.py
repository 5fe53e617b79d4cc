"""
AES-GCM AEAD engine для методов A128GCM и A256GCM.

Параметры:
    - IV: 96 bits (12 bytes)
    - Tag: 128 bits (16 bytes)
    - Key: 128 или 256 bits

Библиотека cryptography выдаёт один буфер ciphertext || tag; engine
разделяет его на два логических поля при шифровании и склеивает обратно
перед расшифровкой.

AAD для direct-режима:

    ASCII(header.serialized) || "." || ASCII(encrypted_key)

Разделитель и пустой encrypted key входят в AAD даже в direct-режиме.

Example:
    >>> engine = AESGCMEngine()
    >>> result = engine.encrypt(key, b"Secret", aad, iv)
    >>> engine.decrypt(key, result.ciphertext, aad, result.auth_tag, iv)
    b'Secret'

Compliance:
    - NIST SP 800-38D (GCM mode)
    - RFC 7518 §5.3
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from src.jose.core.exceptions import (
    IntegrityError,
    JOSEError,
    KeyLengthError,
)
from src.jose.utils import validate_iv_length

logger = logging.getLogger(__name__)

__all__ = [
    "IV_BIT_LENGTH",
    "AUTH_TAG_BIT_LENGTH",
    "AuthenticatedCipherText",
    "AESGCMEngine",
    "compose_aad",
]

IV_BIT_LENGTH: Final[int] = 96
AUTH_TAG_BIT_LENGTH: Final[int] = 128

_ALGORITHM_NAME: Final[str] = "AES-GCM"


@dataclass(frozen=True)
class AuthenticatedCipherText:
    """
    Результат AEAD шифрования.

    Attributes:
        ciphertext: Шифртекст (той же длины, что и plaintext)
        auth_tag: Authentication tag
    """

    ciphertext: bytes
    auth_tag: bytes


def compose_aad(header_text: str, encrypted_key_text: str) -> bytes:
    """AAD = ASCII(header) || "." || ASCII(encrypted key)."""
    return f"{header_text}.{encrypted_key_text}".encode("ascii")


class AESGCMEngine:
    """
    AES-GCM authenticated encryption (stateless).

    Security Warning:
        ⚠️  IV MUST be unique for each encryption with the same key!
    """

    IV_SIZE = IV_BIT_LENGTH // 8
    TAG_SIZE = AUTH_TAG_BIT_LENGTH // 8
    KEY_SIZES = (16, 32)

    def _check_key(self, key: bytes) -> None:
        if not isinstance(key, (bytes, bytearray)):
            raise TypeError(f"Key must be bytes, got {type(key).__name__}")
        if len(key) not in self.KEY_SIZES:
            raise KeyLengthError(
                _ALGORITHM_NAME,
                expected_bits=128 if len(key) < 24 else 256,
                actual_bits=len(key) * 8,
            )

    def encrypt(
        self,
        key: bytes,
        plaintext: bytes,
        aad: bytes,
        iv: bytes,
    ) -> AuthenticatedCipherText:
        """
        Зашифровать данные с AES-GCM.

        Raises:
            KeyLengthError: Ключ не 128/256 бит
            ValidationError: IV не 96 бит
            JOSEError: Внутренняя ошибка библиотеки
        """
        # === VALIDATION ===
        self._check_key(key)

        if not isinstance(plaintext, bytes):
            raise TypeError(f"Plaintext must be bytes, got {type(plaintext).__name__}")

        validate_iv_length(iv, self.IV_SIZE, _ALGORITHM_NAME)

        try:
            output = AESGCM(bytes(key)).encrypt(bytes(iv), plaintext, aad)
        except (ValueError, OverflowError) as e:
            raise JOSEError("Couldn't encrypt with AES/GCM", algorithm=_ALGORITHM_NAME) from e

        # Split output into cipher text and authentication tag
        split = len(output) - self.TAG_SIZE
        logger.debug("AES-GCM: encrypted %d bytes", len(plaintext))
        return AuthenticatedCipherText(ciphertext=output[:split], auth_tag=output[split:])

    def decrypt(
        self,
        key: bytes,
        ciphertext: bytes,
        aad: bytes,
        auth_tag: bytes,
        iv: bytes,
    ) -> bytes:
        """
        Расшифровать данные с AES-GCM.

        Raises:
            IntegrityError: Tag не совпал (plaintext не возвращается)
            KeyLengthError: Ключ не 128/256 бит
            ValidationError: IV не 96 бит
        """
        # === VALIDATION ===
        self._check_key(key)

        if not isinstance(ciphertext, bytes) or not isinstance(auth_tag, bytes):
            raise TypeError("Ciphertext and authentication tag must be bytes")

        validate_iv_length(iv, self.IV_SIZE, _ALGORITHM_NAME)

        # Join cipher text and authentication tag to produce cipher input
        cipher_input = ciphertext + auth_tag

        try:
            plaintext = AESGCM(bytes(key)).decrypt(bytes(iv), cipher_input, aad)
        except InvalidTag as e:
            logger.warning("AES-GCM: authentication tag check failed")
            raise IntegrityError(
                "Couldn't validate GCM authentication tag", algorithm=_ALGORITHM_NAME
            ) from e

        logger.debug("AES-GCM: decrypted %d bytes", len(plaintext))
        return plaintext
