"""
Протокольные интерфейсы JOSE подсистемы.

Определяет контракты:
- JWSVerifierProtocol: верификатор подписи, привязанный к ключу
- JWEDecrypterProtocol: расшифровщик JWE, привязанный к ключу
- CompressionCodecProtocol: внешний кодек сжатия (подключаемый)

Все Protocol классы помечены @runtime_checkable для поддержки
isinstance() проверок.

Example:
    >>> from src.jose.algorithms.deflate import DeflateCodec
    >>> isinstance(DeflateCodec(), CompressionCodecProtocol)
    True
"""

from __future__ import annotations

from typing import FrozenSet, Protocol, runtime_checkable

from src.jose.core.header import JWEHeader, JWSHeader
from src.jose.core.parts import JWEParts

__all__ = [
    "JWSVerifierProtocol",
    "JWEDecrypterProtocol",
    "CompressionCodecProtocol",
]


@runtime_checkable
class JWSVerifierProtocol(Protocol):
    """
    Верификатор JWS подписи.

    Attributes:
        supported_algorithms: Множество поддерживаемых алгоритмов
    """

    @property
    def supported_algorithms(self) -> FrozenSet[str]:
        """Алгоритмы, которые принимает верификатор."""
        ...

    def verify(self, header: JWSHeader, signing_input: bytes, signature: bytes) -> bool:
        """
        Проверить подпись.

        Args:
            header: JWS заголовок
            signing_input: ASCII(header) || "." || ASCII(payload)
            signature: Декодированная подпись

        Returns:
            True если подпись верна, иначе False

        Raises:
            UnsupportedAlgorithmError: Алгоритм заголовка не поддерживается
        """
        ...


@runtime_checkable
class JWEDecrypterProtocol(Protocol):
    """Расшифровщик JWE сообщения."""

    @property
    def supported_algorithms(self) -> FrozenSet[str]:
        """Поддерживаемые режимы управления ключами."""
        ...

    @property
    def supported_encryption_methods(self) -> FrozenSet[str]:
        """Поддерживаемые методы шифрования содержимого."""
        ...

    def decrypt(self, header: JWEHeader, parts: JWEParts) -> bytes:
        """Расшифровать сообщение; возвращает plaintext или бросает JOSEError."""
        ...


@runtime_checkable
class CompressionCodecProtocol(Protocol):
    """
    Кодек сжатия plaintext.

    decompress() бросает любое исключение на повреждённых данных;
    вызывающая сторона оборачивает его в CompressionError.
    """

    def compress(self, data: bytes) -> bytes:
        """Сжать данные."""
        ...

    def decompress(self, data: bytes, max_size: int) -> bytes:
        """Распаковать данные, не превышая max_size байт."""
        ...
