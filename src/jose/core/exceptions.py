"""
Централизованные исключения JOSE модуля.

Иерархия типизированных исключений для диспетчеризации алгоритмов,
direct-режима JWE и верификации JWS. Все ошибки терминальны: повторные
попытки не выполняются, частичные результаты не возвращаются.

Иерархия:
    JOSEError (базовое)
    ├── ValidationError
    ├── KeyTypeError
    │   └── KeyLengthError
    ├── UnsupportedAlgorithmError
    ├── IntegrityError
    ├── CompressionError
    └── DecryptionError

Example:
    >>> from src.jose.core.exceptions import JOSEError
    >>> try:
    ...     decrypter.decrypt(header, parts)
    ... except JOSEError as e:
    ...     logger.error("JWE rejected: %s", e)
    ...     print(f"Algorithm: {e.algorithm}")

Security Note:
    Сообщения об ошибках НЕ содержат:
    - Ключи или их части
    - Plaintext, ciphertext, IV
    - Значения тегов и позиции различающихся байт
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
    "JOSEError",
    "ValidationError",
    "KeyTypeError",
    "KeyLengthError",
    "UnsupportedAlgorithmError",
    "IntegrityError",
    "CompressionError",
    "DecryptionError",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class JOSEError(Exception):
    """
    Базовое исключение для всех ошибок JOSE обработки.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        algorithm: Идентификатор алгоритма или метода (опционально)
        context: Дополнительный контекст для отладки (без секретов!)

    Note:
        str(error) возвращает ровно message: тексты ошибок являются
        частью контракта совместимости и сравниваются побайтно.
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        """Представление для отладки."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"algorithm={self.algorithm!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# VALIDATION ERRORS
# ==============================================================================


class ValidationError(JOSEError):
    """
    Некорректные или отсутствующие части сообщения.

    Raises когда:
    - Encrypted key непуст в direct-режиме
    - Отсутствует IV или integrity value
    - IV неверной длины
    - Base64URL текст не декодируется

    Example:
        >>> decrypter.decrypt(header, JWEParts(iv=None, ...))
        ValidationError: The initialization vector (IV) must not be null
    """

    pass


# ==============================================================================
# KEY ERRORS
# ==============================================================================


class KeyTypeError(JOSEError):
    """
    Тип ключа не соответствует алгоритму.

    Attributes:
        expected: Описание ожидаемого типа ключа
        actual: Описание фактического типа ключа

    Example:
        >>> create_jws_verifier(JWSHeader("HS256"), rsa_public_key)
        KeyTypeError: HS256 requires a symmetric secret key, got RSA
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if expected is not None:
            context["expected"] = expected
        if actual is not None:
            context["actual"] = actual

        super().__init__(message, algorithm=algorithm, context=context)
        self.expected = expected
        self.actual = actual


class KeyLengthError(KeyTypeError):
    """
    Симметричный ключ неподходящей длины.

    Example:
        >>> KeyLengthError("A256GCM", expected_bits=256, actual_bits=128)
        KeyLengthError: Invalid key length for A256GCM: expected 256 bits, got 128 bits
    """

    def __init__(
        self,
        algorithm: str,
        *,
        expected_bits: int,
        actual_bits: int,
        minimum: bool = False,
    ) -> None:
        qualifier = "at least " if minimum else ""
        message = (
            f"Invalid key length for {algorithm}: "
            f"expected {qualifier}{expected_bits} bits, got {actual_bits} bits"
        )
        super().__init__(
            message,
            algorithm=algorithm,
            expected=f"{qualifier}{expected_bits} bits",
            actual=f"{actual_bits} bits",
        )
        self.expected_bits = expected_bits
        self.actual_bits = actual_bits


# ==============================================================================
# ALGORITHM ERRORS
# ==============================================================================


class UnsupportedAlgorithmError(JOSEError):
    """
    Алгоритм, метод шифрования или режим управления ключами не поддерживается.

    Example:
        >>> create_jws_verifier(JWSHeader("xxx"), key)
        UnsupportedAlgorithmError: Unsupported JWS algorithm: xxx
    """

    pass


# ==============================================================================
# CRYPTOGRAPHIC FAILURES
# ==============================================================================


class IntegrityError(JOSEError):
    """
    Несовпадение authentication tag / HMAC.

    Security Note:
        Сообщение НЕ раскрывает, какие байты различаются и где.
    """

    pass


class CompressionError(JOSEError):
    """
    Ошибка декомпрессии или неизвестный алгоритм сжатия.

    Исходное исключение кодека доступно через __cause__.
    """

    pass


class DecryptionError(JOSEError):
    """Ошибка расшифровки после успешной проверки целостности (например, padding)."""

    pass
