"""
Base64URL текстовое представление частей JOSE сообщения.

Base64URL хранит ровно тот текст, который присутствует на проводе:
AAD и MAC input строятся из этих строк без повторного кодирования.
"""

from __future__ import annotations

import base64
import binascii
import re

from src.jose.core.exceptions import ValidationError

__all__ = ["Base64URL"]

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


class Base64URL(str):
    """
    Base64URL строка без padding (RFC 4648 §5, RFC 7515 §2).

    Example:
        >>> text = Base64URL.from_bytes(b"\\x00\\x01")
        >>> text
        'AAE'
        >>> text.decode()
        b'\\x00\\x01'
    """

    __slots__ = ()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Base64URL":
        """Закодировать байты в Base64URL без padding."""
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Data must be bytes, got {type(data).__name__}")
        return cls(base64.urlsafe_b64encode(bytes(data)).rstrip(b"=").decode("ascii"))

    def decode(self) -> bytes:
        """
        Декодировать в байты.

        Raises:
            ValidationError: Текст не является корректным Base64URL
        """
        text = str(self)
        if not _ALPHABET.fullmatch(text) or len(text) % 4 == 1:
            raise ValidationError("Invalid Base64URL encoding")
        try:
            return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
        except (binascii.Error, ValueError) as exc:
            raise ValidationError("Invalid Base64URL encoding") from exc
