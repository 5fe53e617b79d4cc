"""
Идентификаторы алгоритмов JWS/JWE.

Содержит:
- JWSAlgorithm: HS*, RS*, PS*, ES* (12 идентификаторов)
- JWEAlgorithm: "dir" (единственный поддерживаемый режим управления ключами)
- EncryptionMethod: A128GCM, A256GCM, A128CBC-HS256, A256CBC-HS512
- CompressionAlgorithm: DEF
- AlgorithmFamily: тег варианта для результатов диспетчеризации

Заголовки хранят идентификаторы как сырые строки; разрешение в Enum
выполняется функциями resolve_*, которые возвращают None для
неизвестных имён, чтобы вызывающая сторона сформировала ошибку с
исходным именем.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional

__all__ = [
    "AlgorithmFamily",
    "JWSAlgorithm",
    "JWEAlgorithm",
    "EncryptionMethod",
    "CompressionAlgorithm",
    "JWSAlgorithmSpec",
    "EncryptionMethodSpec",
    "JWS_ALGORITHMS",
    "ENCRYPTION_METHODS",
    "resolve_jws_algorithm",
    "resolve_encryption_method",
]


class AlgorithmFamily(str, Enum):
    """Семейство алгоритма подписи (тег результата диспетчеризации)."""

    HMAC = "HMAC"
    RSA = "RSA"
    EC = "EC"


class JWSAlgorithm(str, Enum):
    """JWS алгоритмы подписи."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"


class JWEAlgorithm(str, Enum):
    """JWE режимы управления ключами."""

    DIR = "dir"


class EncryptionMethod(str, Enum):
    """JWE методы шифрования содержимого."""

    A128CBC_HS256 = "A128CBC-HS256"
    A256CBC_HS512 = "A256CBC-HS512"
    A128GCM = "A128GCM"
    A256GCM = "A256GCM"


class CompressionAlgorithm(str, Enum):
    """JWE алгоритмы сжатия."""

    DEF = "DEF"


# ==============================================================================
# ALGORITHM PARAMETERS
# ==============================================================================


@dataclass(frozen=True)
class JWSAlgorithmSpec:
    """
    Параметры JWS алгоритма.

    Attributes:
        family: Семейство (HMAC / RSA / EC)
        hash_name: Имя хеш-функции ("SHA256", "SHA384", "SHA512")
        min_key_bits: Минимальная длина секрета для HMAC (0 для остальных)
        curve: Обязательная кривая для EC ("secp256r1", ...)
        pss: True для RSASSA-PSS
    """

    family: AlgorithmFamily
    hash_name: str
    min_key_bits: int = 0
    curve: Optional[str] = None
    pss: bool = False


@dataclass(frozen=True)
class EncryptionMethodSpec:
    """
    Параметры метода шифрования содержимого.

    Attributes:
        key_bits: Длина общего ключа для direct-режима
        iv_bits: Длина IV
        aead: True для GCM, False для композитного CBC+HMAC
        cek_bits: Длина выводимого CEK (только CBC+HMAC)
        cik_bits: Длина выводимого CIK (только CBC+HMAC)
        hash_name: Хеш для Concat KDF и HMAC (только CBC+HMAC)
    """

    key_bits: int
    iv_bits: int
    aead: bool
    cek_bits: int = 0
    cik_bits: int = 0
    hash_name: Optional[str] = None


JWS_ALGORITHMS: Final[dict[JWSAlgorithm, JWSAlgorithmSpec]] = {
    JWSAlgorithm.HS256: JWSAlgorithmSpec(AlgorithmFamily.HMAC, "SHA256", min_key_bits=256),
    JWSAlgorithm.HS384: JWSAlgorithmSpec(AlgorithmFamily.HMAC, "SHA384", min_key_bits=384),
    JWSAlgorithm.HS512: JWSAlgorithmSpec(AlgorithmFamily.HMAC, "SHA512", min_key_bits=512),
    JWSAlgorithm.RS256: JWSAlgorithmSpec(AlgorithmFamily.RSA, "SHA256"),
    JWSAlgorithm.RS384: JWSAlgorithmSpec(AlgorithmFamily.RSA, "SHA384"),
    JWSAlgorithm.RS512: JWSAlgorithmSpec(AlgorithmFamily.RSA, "SHA512"),
    JWSAlgorithm.PS256: JWSAlgorithmSpec(AlgorithmFamily.RSA, "SHA256", pss=True),
    JWSAlgorithm.PS384: JWSAlgorithmSpec(AlgorithmFamily.RSA, "SHA384", pss=True),
    JWSAlgorithm.PS512: JWSAlgorithmSpec(AlgorithmFamily.RSA, "SHA512", pss=True),
    JWSAlgorithm.ES256: JWSAlgorithmSpec(AlgorithmFamily.EC, "SHA256", curve="secp256r1"),
    JWSAlgorithm.ES384: JWSAlgorithmSpec(AlgorithmFamily.EC, "SHA384", curve="secp384r1"),
    JWSAlgorithm.ES512: JWSAlgorithmSpec(AlgorithmFamily.EC, "SHA512", curve="secp521r1"),
}

ENCRYPTION_METHODS: Final[dict[EncryptionMethod, EncryptionMethodSpec]] = {
    EncryptionMethod.A128GCM: EncryptionMethodSpec(key_bits=128, iv_bits=96, aead=True),
    EncryptionMethod.A256GCM: EncryptionMethodSpec(key_bits=256, iv_bits=96, aead=True),
    EncryptionMethod.A128CBC_HS256: EncryptionMethodSpec(
        key_bits=256,
        iv_bits=128,
        aead=False,
        cek_bits=128,
        cik_bits=256,
        hash_name="SHA256",
    ),
    EncryptionMethod.A256CBC_HS512: EncryptionMethodSpec(
        key_bits=512,
        iv_bits=128,
        aead=False,
        cek_bits=256,
        cik_bits=512,
        hash_name="SHA512",
    ),
}


def resolve_jws_algorithm(name: str) -> Optional[JWSAlgorithm]:
    """Найти JWS алгоритм по точному имени (регистр важен)."""
    try:
        return JWSAlgorithm(name)
    except ValueError:
        return None


def resolve_encryption_method(name: Optional[str]) -> Optional[EncryptionMethod]:
    """Найти метод шифрования по точному имени."""
    if name is None:
        return None
    try:
        return EncryptionMethod(name)
    except ValueError:
        return None
