"""
Композитный engine AES-CBC + HMAC (encrypt-then-MAC) для A128CBC-HS256
и A256CBC-HS512.

Порядок расшифровки (каждый шаг является предусловием следующего):
    1. Concat KDF: CEK и CIK из общего ключа, epu/epv из заголовка
    2. MAC input = ASCII(header) || "." || ASCII(encrypted_key) || "." ||
                   ASCII(iv) || "." || ASCII(ciphertext)
       expected tag = левая половина HMAC(CIK, MAC input)
    3. Сравнение тегов в константное время → IntegrityError при несовпадении
    4. Только после совпадения: AES-CBC расшифровка с CEK и IV, снятие PKCS#7

Все текстовые поля совпадают с Base64URL строками, что и на проводе.

Параметры:
    ================  ========  ========  ========  =========
    Метод             CEK       CIK       HMAC      Tag
    ================  ========  ========  ========  =========
    A128CBC-HS256     128 bit   256 bit   SHA-256   128 bit
    A256CBC-HS512     256 bit   512 bit   SHA-512   256 bit
    ================  ========  ========  ========  =========

IV: 128 bits (один блок AES).

Security Warning:
    ⛔ Расшифровка до проверки тега запрещена (padding oracle).
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Final

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from src.jose.algorithms.aes_gcm import AuthenticatedCipherText
from src.jose.algorithms.concat_kdf import derive_key_set
from src.jose.core.algorithms import ENCRYPTION_METHODS, EncryptionMethod
from src.jose.core.base64url import Base64URL
from src.jose.core.exceptions import (
    DecryptionError,
    IntegrityError,
    JOSEError,
    UnsupportedAlgorithmError,
)
from src.jose.core.header import JWEHeader
from src.jose.utils import constant_time_equals, validate_iv_length

logger = logging.getLogger(__name__)

__all__ = [
    "IV_BIT_LENGTH",
    "AESCBCHMACEngine",
    "compose_mac_input",
]

IV_BIT_LENGTH: Final[int] = 128

_BLOCK_BITS: Final[int] = 128

_DIGESTS: Final[dict[str, str]] = {
    "SHA256": "sha256",
    "SHA512": "sha512",
}


def compose_mac_input(
    header_text: str,
    encrypted_key_text: str,
    iv_text: str,
    ciphertext_text: str,
) -> bytes:
    """MAC input: четыре Base64URL поля через "."."""
    return ".".join((header_text, encrypted_key_text, iv_text, ciphertext_text)).encode("ascii")


class AESCBCHMACEngine:
    """
    AES-CBC + HMAC authenticated encryption с ключами из Concat KDF.

    Engine хранит только метод шифрования; производные ключи живут
    в пределах одного вызова и зануляются по его завершении.

    Example:
        >>> engine = AESCBCHMACEngine(EncryptionMethod.A128CBC_HS256)
        >>> result = engine.encrypt(master_key, b"data", iv, header=header)
        >>> engine.decrypt(
        ...     master_key,
        ...     header=header,
        ...     encrypted_key_text="",
        ...     iv=Base64URL.from_bytes(iv),
        ...     ciphertext=Base64URL.from_bytes(result.ciphertext),
        ...     auth_tag=result.auth_tag,
        ... )
        b'data'
    """

    IV_SIZE = IV_BIT_LENGTH // 8

    def __init__(self, method: EncryptionMethod) -> None:
        spec = ENCRYPTION_METHODS.get(method)
        if spec is None or spec.aead or spec.hash_name not in _DIGESTS:
            raise UnsupportedAlgorithmError(
                f"Not an AES-CBC/HMAC encryption method: {getattr(method, 'value', method)}",
                algorithm=str(getattr(method, "value", method)),
            )
        self.method = method
        self._digest = _DIGESTS[spec.hash_name]

    @property
    def tag_size(self) -> int:
        """Длина тега в байтах (половина HMAC)."""
        return hashlib.new(self._digest).digest_size // 2

    def compute_tag(self, cik: bytes, mac_input: bytes) -> bytes:
        """Левая половина HMAC(CIK, mac_input)."""
        mac = hmac.new(cik, mac_input, self._digest).digest()
        return mac[: len(mac) // 2]

    def encrypt(
        self,
        master_key: bytes,
        plaintext: bytes,
        iv: bytes,
        *,
        header: JWEHeader,
        encrypted_key_text: str = "",
    ) -> AuthenticatedCipherText:
        """
        Зашифровать и вычислить тег.

        Raises:
            ValidationError: IV не 128 бит
            JOSEError: Внутренняя ошибка библиотеки
        """
        if not isinstance(plaintext, bytes):
            raise TypeError(f"Plaintext must be bytes, got {type(plaintext).__name__}")
        validate_iv_length(iv, self.IV_SIZE, self.method.value)

        with derive_key_set(
            master_key,
            self.method,
            party_u_info=header.party_u_info,
            party_v_info=header.party_v_info,
        ) as keys:
            try:
                padder = padding.PKCS7(_BLOCK_BITS).padder()
                padded = padder.update(plaintext) + padder.finalize()
                encryptor = Cipher(algorithms.AES(bytes(keys.cek)), modes.CBC(bytes(iv))).encryptor()
                ciphertext = encryptor.update(padded) + encryptor.finalize()
            except ValueError as e:
                raise JOSEError(
                    f"{self.method.value} encryption failed", algorithm=self.method.value
                ) from e

            mac_input = compose_mac_input(
                str(header.serialized),
                encrypted_key_text,
                Base64URL.from_bytes(iv),
                Base64URL.from_bytes(ciphertext),
            )
            tag = self.compute_tag(keys.cik, mac_input)

        logger.debug("%s: encrypted %d bytes", self.method.value, len(plaintext))
        return AuthenticatedCipherText(ciphertext=ciphertext, auth_tag=tag)

    def decrypt(
        self,
        master_key: bytes,
        *,
        header: JWEHeader,
        encrypted_key_text: str,
        iv: Base64URL,
        ciphertext: Base64URL,
        auth_tag: bytes,
    ) -> bytes:
        """
        Проверить тег и расшифровать.

        Args:
            master_key: Общий ключ direct-режима
            header: JWE заголовок (serialized, epu, epv)
            encrypted_key_text: Base64URL текст encrypted key ("" в direct)
            iv: IV в Base64URL форме (как на проводе)
            ciphertext: Шифртекст в Base64URL форме (как на проводе)
            auth_tag: Декодированное integrity value

        Raises:
            ValidationError: Некорректный IV или Base64URL
            IntegrityError: HMAC integrity check failed
            DecryptionError: Некорректный padding после успешной проверки тега
        """
        iv_bytes = iv.decode()
        validate_iv_length(iv_bytes, self.IV_SIZE, self.method.value)
        ciphertext_bytes = ciphertext.decode()

        with derive_key_set(
            master_key,
            self.method,
            party_u_info=header.party_u_info,
            party_v_info=header.party_v_info,
        ) as keys:
            mac_input = compose_mac_input(
                str(header.serialized), encrypted_key_text, str(iv), str(ciphertext)
            )
            expected = self.compute_tag(keys.cik, mac_input)

            if not constant_time_equals(expected, auth_tag):
                logger.warning("%s: HMAC integrity check failed", self.method.value)
                raise IntegrityError("HMAC integrity check failed", algorithm=self.method.value)

            try:
                decryptor = Cipher(
                    algorithms.AES(bytes(keys.cek)), modes.CBC(iv_bytes)
                ).decryptor()
                padded = decryptor.update(ciphertext_bytes) + decryptor.finalize()
                unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
                plaintext = unpadder.update(padded) + unpadder.finalize()
            except ValueError as e:
                raise DecryptionError(
                    f"{self.method.value} decryption failed", algorithm=self.method.value
                ) from e

        logger.debug("%s: decrypted %d bytes", self.method.value, len(plaintext))
        return plaintext
