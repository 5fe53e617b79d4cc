# -*- coding: utf-8 -*-
"""
RU: Утилиты JOSE: генерация IV, сравнение тегов в константное время,
best-effort зануление буферов с производными ключами и проверка длины IV.
"""
from __future__ import annotations

import logging
import secrets
from typing import Final, Optional, Union

from src.jose.core.exceptions import ValidationError

_LOGGER: Final = logging.getLogger(__name__)

_MAX_IV_BYTES: Final[int] = 64


def generate_iv(n: int) -> bytes:
    """
    Generate a random initialization vector.

    Args:
        n: IV length in bytes (1..64).

    Returns:
        Random bytes from the OS CSPRNG.

    Raises:
        ValueError: if n is out of range.
    """
    if not isinstance(n, int) or n <= 0 or n > _MAX_IV_BYTES:
        raise ValueError("IV size must be in 1..64 bytes")
    return secrets.token_bytes(n)


def constant_time_equals(
    expected: Union[bytes, bytearray], actual: Union[bytes, bytearray]
) -> bool:
    """
    Constant-time bytes comparison.

    Walks the full length of ``expected`` and accumulates the XOR of every
    byte pair, so the running time depends only on the lengths and never on
    the position of the first differing byte. On a length mismatch the loop
    still runs over ``expected`` (against itself) before returning False.

    Args:
        expected: locally computed tag.
        actual: tag received from the wire.

    Returns:
        True if sequences are equal, False otherwise.
    """
    diff = len(expected) ^ len(actual)
    other = actual if len(actual) == len(expected) else expected
    for x, y in zip(expected, other):
        diff |= x ^ y
    return diff == 0


def zero_memory(buf: Optional[bytearray]) -> None:
    """
    Best-effort zeroization of mutable buffer.

    Args:
        buf: bytearray to wipe (None is silently ignored).

    Notes:
        - Only works on bytearray (mutable); bytes cannot be wiped.
        - Ограничения Python: сборщик мусора и копии, сделанные библиотеками,
          означают, что истинное стирание недостижимо на чистом Python.
    """
    if buf is None:
        return
    try:
        for i in range(len(buf)):
            buf[i] = 0
    except (TypeError, AttributeError) as e:
        # Expected for immutable types
        _LOGGER.debug("zero_memory skip (immutable): %s", e.__class__.__name__)


def validate_iv_length(iv: Union[bytes, bytearray], expected_length: int, algorithm: str) -> None:
    """
    Validate IV length.

    Raises:
        ValidationError: if length mismatch.
    """
    if len(iv) != expected_length:
        raise ValidationError(
            f"Invalid IV length for {algorithm}: "
            f"{len(iv) * 8} bits, expected {expected_length * 8} bits",
            algorithm=algorithm,
        )


__all__ = [
    "generate_iv",
    "constant_time_equals",
    "zero_memory",
    "validate_iv_length",
]
