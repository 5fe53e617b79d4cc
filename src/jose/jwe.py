"""
Direct-режим JWE: шифрование и расшифровка общим симметричным ключом.

Ключ используется как есть (без обёртки CEK), поэтому encrypted key
всегда пуст. Поддерживаемые методы шифрования:

    - A128GCM, A256GCM            → AESGCMEngine (AEAD)
    - A128CBC-HS256, A256CBC-HS512 → AESCBCHMACEngine (Concat KDF + HMAC)

Длина общего ключа определяется методом:

    =============== ========
    Метод           Ключ
    =============== ========
    A128GCM         128 bit
    A256GCM         256 bit
    A128CBC-HS256   256 bit
    A256CBC-HS512   512 bit
    =============== ========

Конвейер расшифровки (DirectDecrypter.decrypt):

    PartValidation → AlgorithmCheck → EngineSelection →
    {AEAD | Composite} → Decompression → plaintext

Любая ошибка на любом этапе терминальна; частичный plaintext не
возвращается. Проверки частей и алгоритмов выполняются до обращения
к шифру.

Example:
    >>> key = os.urandom(32)
    >>> header = JWEHeader("dir", "A128CBC-HS256", compression_algorithm="DEF")
    >>> parts = DirectEncrypter(key).encrypt(header, b"Hello, JWE!")
    >>> DirectDecrypter(key).decrypt(header, parts)
    b'Hello, JWE!'

Thread Safety:
    Экземпляры неизменяемы после создания; decrypt()/encrypt() можно
    вызывать одновременно из разных потоков.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from src.jose.algorithms.aes_cbc_hmac import AESCBCHMACEngine
from src.jose.algorithms.aes_gcm import AESGCMEngine, compose_aad
from src.jose.algorithms.deflate import DeflateCodec
from src.jose.config import JOSEConfig
from src.jose.core.algorithms import (
    ENCRYPTION_METHODS,
    CompressionAlgorithm,
    EncryptionMethod,
    JWEAlgorithm,
    resolve_encryption_method,
)
from src.jose.core.base64url import Base64URL
from src.jose.core.exceptions import (
    CompressionError,
    KeyLengthError,
    KeyTypeError,
    UnsupportedAlgorithmError,
    ValidationError,
)
from src.jose.core.header import JWEHeader
from src.jose.core.keys import SecretKey, as_secret_key, describe_key
from src.jose.core.parts import JWEParts
from src.jose.core.protocols import CompressionCodecProtocol
from src.jose.utils import generate_iv

logger = logging.getLogger(__name__)

__all__ = [
    "DirectDecrypter",
    "DirectEncrypter",
    "default_codecs",
]

_SUPPORTED_KEY_BITS: FrozenSet[int] = frozenset(
    spec.key_bits for spec in ENCRYPTION_METHODS.values()
)

_UNSUPPORTED_METHOD_MESSAGE = (
    "Unsupported encryption method, must be "
    "A128CBC-HS256, A256CBC-HS512, A128GCM or A256GCM"
)


def default_codecs() -> Mapping[str, CompressionCodecProtocol]:
    """Кодеки сжатия по умолчанию: {"DEF": DeflateCodec}."""
    return MappingProxyType({CompressionAlgorithm.DEF.value: DeflateCodec()})


class _DirectCryptoProvider:
    """
    Общая часть DirectEncrypter / DirectDecrypter.

    Хранит общий ключ, конфигурацию и кодеки; проверяет режим, метод
    шифрования и соответствие длины ключа методу.
    """

    def __init__(
        self,
        key: object,
        *,
        config: Optional[JOSEConfig] = None,
        codecs: Optional[Mapping[str, CompressionCodecProtocol]] = None,
    ) -> None:
        secret = as_secret_key(key)
        if secret is None:
            raise KeyTypeError(
                "Direct encryption requires a symmetric secret key",
                algorithm=JWEAlgorithm.DIR.value,
                expected="oct",
                actual=describe_key(key).family.value,
            )
        if secret.bit_length not in _SUPPORTED_KEY_BITS:
            raise KeyTypeError(
                f"The key length must be one of {sorted(_SUPPORTED_KEY_BITS)} bits, "
                f"got {secret.bit_length} bits",
                algorithm=JWEAlgorithm.DIR.value,
                expected="128/256/512 bits",
                actual=f"{secret.bit_length} bits",
            )

        self._key = secret
        self.config = config or JOSEConfig()
        self._codecs: Mapping[str, CompressionCodecProtocol] = (
            MappingProxyType(dict(codecs)) if codecs is not None else default_codecs()
        )

    @property
    def key(self) -> SecretKey:
        """Общий симметричный ключ."""
        return self._key

    @property
    def supported_algorithms(self) -> FrozenSet[str]:
        return frozenset(self.config.accepted_algorithms)

    @property
    def supported_encryption_methods(self) -> FrozenSet[str]:
        return frozenset(self.config.accepted_methods)

    def _check_algorithm(self, header: JWEHeader) -> None:
        if header.algorithm not in self.config.accepted_algorithms:
            raise UnsupportedAlgorithmError(
                'Unsupported algorithm, must be "dir"', algorithm=header.algorithm
            )

    def _select_method(self, header: JWEHeader) -> EncryptionMethod:
        method = resolve_encryption_method(header.encryption_method)
        if method is None:
            raise UnsupportedAlgorithmError(
                _UNSUPPORTED_METHOD_MESSAGE, algorithm=header.encryption_method
            )
        if method.value not in self.config.accepted_methods:
            raise UnsupportedAlgorithmError(
                f"Encryption method {method.value} is not accepted, must be one of "
                f"{', '.join(sorted(self.config.accepted_methods))}",
                algorithm=method.value,
            )

        expected_bits = ENCRYPTION_METHODS[method].key_bits
        if self._key.bit_length != expected_bits:
            raise KeyLengthError(
                method.value, expected_bits=expected_bits, actual_bits=self._key.bit_length
            )
        return method

    def _codec_for(self, header: JWEHeader) -> Optional[CompressionCodecProtocol]:
        zip_alg = header.compression_algorithm
        if zip_alg is None:
            return None
        codec = self._codecs.get(zip_alg)
        if codec is None or zip_alg not in self.config.accepted_compression:
            raise CompressionError(
                f"Unsupported compression algorithm: {zip_alg}", algorithm=zip_alg
            )
        return codec


class DirectDecrypter(_DirectCryptoProvider):
    """
    Расшифровщик JWE в direct-режиме.

    Attributes:
        config: Фильтр заголовков и лимиты (JOSEConfig)

    Example:
        >>> decrypter = DirectDecrypter(shared_key)
        >>> plaintext = decrypter.decrypt(JWEHeader.parse(header_text), parts)
    """

    def decrypt(self, header: JWEHeader, parts: JWEParts) -> bytes:
        """
        Расшифровать JWE сообщение.

        Raises:
            ValidationError: Непустой encrypted key, нет IV / integrity value
            UnsupportedAlgorithmError: alg не "dir" или неизвестный enc
            KeyLengthError: Длина ключа не соответствует enc
            IntegrityError: Тег не совпал
            CompressionError: Ошибка декомпрессии или неизвестный zip
        """
        # === PART VALIDATION ===
        if parts.encrypted_key:
            raise ValidationError("The encrypted key must be omitted (empty)")
        if parts.iv is None:
            raise ValidationError("The initialization vector (IV) must not be null")
        if parts.auth_tag is None:
            raise ValidationError("The integrity value must not be null")
        if parts.ciphertext is None:
            raise ValidationError("The cipher text must not be null")

        # === ALGORITHM CHECK ===
        self._check_algorithm(header)

        # === ENGINE SELECTION ===
        method = self._select_method(header)
        auth_tag = parts.auth_tag.decode()

        if ENCRYPTION_METHODS[method].aead:
            aad = compose_aad(str(header.serialized), parts.encrypted_key_text)
            plaintext = AESGCMEngine().decrypt(
                self._key.secret,
                parts.ciphertext.decode(),
                aad,
                auth_tag,
                parts.iv.decode(),
            )
        else:
            plaintext = AESCBCHMACEngine(method).decrypt(
                self._key.secret,
                header=header,
                encrypted_key_text=parts.encrypted_key_text,
                iv=parts.iv,
                ciphertext=parts.ciphertext,
                auth_tag=auth_tag,
            )

        # === DECOMPRESSION ===
        return self._apply_decompression(header, plaintext)

    def _apply_decompression(self, header: JWEHeader, data: bytes) -> bytes:
        codec = self._codec_for(header)
        if codec is None:
            return data
        try:
            inflated = codec.decompress(data, self.config.max_decompressed_size)
        except Exception as e:
            raise CompressionError(
                f"Couldn't decompress plain text: {e}",
                algorithm=header.compression_algorithm,
            ) from e
        logger.debug("Decompressed plain text: %d -> %d bytes", len(data), len(inflated))
        return inflated


class DirectEncrypter(_DirectCryptoProvider):
    """
    Шифровальщик JWE в direct-режиме.

    Example:
        >>> parts = DirectEncrypter(shared_key).encrypt(JWEHeader("dir", "A256GCM"), b"data")
        >>> parts.encrypted_key
        ''
    """

    def encrypt(
        self,
        header: JWEHeader,
        plaintext: bytes,
        *,
        iv: Optional[bytes] = None,
    ) -> JWEParts:
        """
        Зашифровать plaintext.

        Args:
            header: JWE заголовок (alg="dir")
            plaintext: Данные
            iv: Опциональный IV; по умолчанию случайный нужной длины

        Returns:
            JWEParts с пустым encrypted key

        Raises:
            UnsupportedAlgorithmError: alg не "dir" или неизвестный enc
            KeyLengthError: Длина ключа не соответствует enc
            CompressionError: Неизвестный zip или ошибка сжатия
        """
        if not isinstance(plaintext, bytes):
            raise TypeError(f"Plaintext must be bytes, got {type(plaintext).__name__}")

        self._check_algorithm(header)
        method = self._select_method(header)
        spec = ENCRYPTION_METHODS[method]

        codec = self._codec_for(header)
        if codec is not None:
            try:
                plaintext = codec.compress(plaintext)
            except Exception as e:
                raise CompressionError(
                    f"Couldn't compress plain text: {e}",
                    algorithm=header.compression_algorithm,
                ) from e

        if iv is None:
            iv = generate_iv(spec.iv_bits // 8)

        if spec.aead:
            result = AESGCMEngine().encrypt(
                self._key.secret,
                plaintext,
                compose_aad(str(header.serialized), ""),
                iv,
            )
        else:
            result = AESCBCHMACEngine(method).encrypt(
                self._key.secret, plaintext, iv, header=header
            )

        return JWEParts(
            encrypted_key=Base64URL(""),
            iv=Base64URL.from_bytes(iv),
            ciphertext=Base64URL.from_bytes(result.ciphertext),
            auth_tag=Base64URL.from_bytes(result.auth_tag),
        )
