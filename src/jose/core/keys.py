"""
Модель ключей: симметричный секрет или асимметричный публичный ключ.

Асимметричные ключи представлены объектами библиотеки cryptography
(RSAPublicKey, EllipticCurvePublicKey); describe_key() сводит любой
поддерживаемый ключ к дескриптору (семейство, длина, кривая), по которому
выполняется диспетчеризация без isinstance-проверок в вызывающем коде.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from cryptography.hazmat.primitives.asymmetric import ec, rsa

__all__ = [
    "KeyFamily",
    "SecretKey",
    "KeyDescriptor",
    "JOSEKey",
    "describe_key",
    "as_secret_key",
]


class KeyFamily(str, Enum):
    """Семейство ключа."""

    OCT = "oct"
    RSA = "RSA"
    EC = "EC"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SecretKey:
    """
    Симметричный ключ (octet sequence).

    Attributes:
        secret: Байты ключа

    Note:
        repr() не раскрывает байты ключа.
    """

    secret: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.secret, (bytes, bytearray)):
            raise TypeError(f"Secret must be bytes, got {type(self.secret).__name__}")
        object.__setattr__(self, "secret", bytes(self.secret))

    @property
    def bit_length(self) -> int:
        """Длина ключа в битах."""
        return len(self.secret) * 8

    def __repr__(self) -> str:
        return f"SecretKey(bit_length={self.bit_length})"


JOSEKey = Union[SecretKey, bytes, rsa.RSAPublicKey, ec.EllipticCurvePublicKey]


@dataclass(frozen=True)
class KeyDescriptor:
    """
    Форма ключа для проверки совместимости с алгоритмом.

    Attributes:
        family: Семейство ключа
        bit_length: Длина секрета (OCT) или модуля (RSA) в битах
        curve: Имя кривой для EC ("secp256r1", ...)
        public: True для публичных асимметричных ключей
    """

    family: KeyFamily
    bit_length: int = 0
    curve: Optional[str] = None
    public: bool = False


def as_secret_key(key: object) -> Optional[SecretKey]:
    """Привести bytes/SecretKey к SecretKey; иначе None."""
    if isinstance(key, SecretKey):
        return key
    if isinstance(key, (bytes, bytearray)):
        return SecretKey(bytes(key))
    return None


def describe_key(key: object) -> KeyDescriptor:
    """
    Определить форму ключа.

    Example:
        >>> describe_key(os.urandom(32))
        KeyDescriptor(family=<KeyFamily.OCT: 'oct'>, bit_length=256, curve=None, public=False)
    """
    secret = as_secret_key(key)
    if secret is not None:
        return KeyDescriptor(KeyFamily.OCT, bit_length=secret.bit_length)

    if isinstance(key, rsa.RSAPublicKey):
        return KeyDescriptor(KeyFamily.RSA, bit_length=key.key_size, public=True)
    if isinstance(key, rsa.RSAPrivateKey):
        return KeyDescriptor(KeyFamily.RSA, bit_length=key.key_size, public=False)

    if isinstance(key, ec.EllipticCurvePublicKey):
        return KeyDescriptor(
            KeyFamily.EC, bit_length=key.curve.key_size, curve=key.curve.name, public=True
        )
    if isinstance(key, ec.EllipticCurvePrivateKey):
        return KeyDescriptor(
            KeyFamily.EC, bit_length=key.curve.key_size, curve=key.curve.name, public=False
        )

    return KeyDescriptor(KeyFamily.UNKNOWN)
