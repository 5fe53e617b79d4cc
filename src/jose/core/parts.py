"""
Части JWE сообщения (после разбора компактной сериализации).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.jose.core.base64url import Base64URL

__all__ = ["JWEParts"]


@dataclass(frozen=True)
class JWEParts:
    """
    Части JWE сообщения в Base64URL форме.

    Attributes:
        encrypted_key: Зашифрованный CEK; в direct-режиме None или пустая строка
        iv: Initialization vector
        ciphertext: Шифртекст
        auth_tag: Integrity value / authentication tag
    """

    encrypted_key: Optional[Base64URL]
    iv: Optional[Base64URL]
    ciphertext: Optional[Base64URL]
    auth_tag: Optional[Base64URL]

    @property
    def encrypted_key_text(self) -> str:
        """Текст encrypted key для AAD / MAC input (пустая строка, если отсутствует)."""
        return str(self.encrypted_key) if self.encrypted_key is not None else ""
