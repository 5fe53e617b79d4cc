# -*- coding: utf-8 -*-
"""
RU: Конфигурация обработки JWE: допустимые алгоритмы, методы шифрования,
сжатие и лимит распакованного размера, с предопределёнными профилями.
EN: JWE processing configuration (header filter) with predefined profiles.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, FrozenSet

from src.jose.core.algorithms import CompressionAlgorithm, EncryptionMethod, JWEAlgorithm


class SecurityProfile(str, Enum):
    """Predefined header filter profiles."""

    # All four direct-mode encryption methods, DEF compression allowed
    DEFAULT = "default"

    # AES-GCM only, no compression
    AEAD_ONLY = "aead_only"


DEFAULT_MAX_DECOMPRESSED_SIZE: Final[int] = 10 * 1024 * 1024


@dataclass(frozen=True)
class JOSEConfig:
    """
    JWE header filter and resource limits.

    Attributes:
        accepted_algorithms: Key management algorithms accepted ("dir").
        accepted_methods: Content encryption methods accepted.
        accepted_compression: Compression algorithms accepted.
        max_decompressed_size: Upper bound for inflated plaintext, in bytes.

    Examples:
        >>> config = JOSEConfig.from_profile(SecurityProfile.AEAD_ONLY)
        >>> sorted(config.accepted_methods)
        ['A128GCM', 'A256GCM']
    """

    accepted_algorithms: FrozenSet[str] = frozenset({JWEAlgorithm.DIR.value})
    accepted_methods: FrozenSet[str] = frozenset(m.value for m in EncryptionMethod)
    accepted_compression: FrozenSet[str] = frozenset({CompressionAlgorithm.DEF.value})
    max_decompressed_size: int = DEFAULT_MAX_DECOMPRESSED_SIZE

    def __post_init__(self) -> None:
        """Validate parameters."""
        known_algorithms = {a.value for a in JWEAlgorithm}
        known_methods = {m.value for m in EncryptionMethod}
        known_compression = {c.value for c in CompressionAlgorithm}

        if not self.accepted_algorithms:
            raise ValueError("accepted_algorithms must not be empty")
        if not set(self.accepted_algorithms) <= known_algorithms:
            raise ValueError(f"accepted_algorithms must be a subset of {sorted(known_algorithms)}")
        if not self.accepted_methods:
            raise ValueError("accepted_methods must not be empty")
        if not set(self.accepted_methods) <= known_methods:
            raise ValueError(f"accepted_methods must be a subset of {sorted(known_methods)}")
        if not set(self.accepted_compression) <= known_compression:
            raise ValueError(
                f"accepted_compression must be a subset of {sorted(known_compression)}"
            )
        if self.max_decompressed_size < 1:
            raise ValueError("max_decompressed_size must be >= 1")

    @staticmethod
    def from_profile(profile: SecurityProfile) -> "JOSEConfig":
        """
        Create configuration from predefined profile.

        Examples:
            >>> JOSEConfig.from_profile(SecurityProfile.DEFAULT).accepted_compression
            frozenset({'DEF'})
        """
        return _PROFILE_PARAMS[profile]


_PROFILE_PARAMS: Final[dict[SecurityProfile, JOSEConfig]] = {
    SecurityProfile.DEFAULT: JOSEConfig(),
    SecurityProfile.AEAD_ONLY: JOSEConfig(
        accepted_methods=frozenset(
            {EncryptionMethod.A128GCM.value, EncryptionMethod.A256GCM.value}
        ),
        accepted_compression=frozenset(),
    ),
}


__all__ = [
    "SecurityProfile",
    "JOSEConfig",
    "DEFAULT_MAX_DECOMPRESSED_SIZE",
]
