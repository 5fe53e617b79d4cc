"""
Concat KDF (NIST SP 800-56A, §5.8.1) для композитных методов A*CBC-HS*.

Из одного общего ключа выводятся два независимых ключа:
- CEK (content encryption key) для AES-CBC
- CIK (content integrity key) для HMAC

Конструкция раунда:

    Hash(counter || Z || OtherInfo)

    counter:   32-bit big-endian, начиная с 1
    Z:         общий секрет
    OtherInfo: AlgorithmID || PartyUInfo || PartyVInfo || SuppPubInfo

    AlgorithmID = len32(enc) || enc || len32(label) || label
    PartyUInfo  = len32(epu) || epu     (len32(0), если epu отсутствует)
    PartyVInfo  = len32(epv) || epv     (len32(0), если epv отсутствует)
    SuppPubInfo = 32-bit big-endian длина выходного ключа в битах

Хеши раундов конкатенируются и обрезаются до запрошенной длины. CEK и CIK
различаются только меткой назначения ("Encryption" / "Integrity"), поэтому
ключи криптографически независимы.

Example:
    >>> kdf = ConcatKDF("SHA256")
    >>> cek = kdf.derive(master_key, CEK_LABEL, method="A128CBC-HS256", key_bit_length=128)
    >>> len(cek)
    16

Security Notes:
    - Функция детерминирована и не хранит состояния между вызовами
    - Производные ключи не кэшируются и не логируются
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import Final, Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.concatkdf import ConcatKDFHash

from src.jose.core.algorithms import ENCRYPTION_METHODS, EncryptionMethod
from src.jose.core.exceptions import JOSEError, UnsupportedAlgorithmError
from src.jose.utils import zero_memory

logger = logging.getLogger(__name__)

__all__ = [
    "CEK_LABEL",
    "CIK_LABEL",
    "ConcatKDF",
    "DerivedKeySet",
    "derive_key_set",
]

CEK_LABEL: Final[str] = "Encryption"
CIK_LABEL: Final[str] = "Integrity"

_HASHES: Final[dict[str, type[hashes.HashAlgorithm]]] = {
    "SHA256": hashes.SHA256,
    "SHA384": hashes.SHA384,
    "SHA512": hashes.SHA512,
}


def _length_prefixed(data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + data


class ConcatKDF:
    """
    Concat KDF поверх cryptography.ConcatKDFHash.

    Attributes:
        hash_name: Имя хеш-функции раунда ("SHA256", "SHA384", "SHA512")
    """

    def __init__(self, hash_name: str) -> None:
        if hash_name not in _HASHES:
            raise UnsupportedAlgorithmError(
                f"Unsupported Concat KDF hash: {hash_name}", algorithm=hash_name
            )
        self.hash_name = hash_name

    @staticmethod
    def other_info(
        label: str,
        *,
        method: str,
        party_u_info: Optional[bytes] = None,
        party_v_info: Optional[bytes] = None,
        key_bit_length: int,
    ) -> bytes:
        """Собрать OtherInfo = AlgorithmID || PartyUInfo || PartyVInfo || SuppPubInfo."""
        algorithm_id = _length_prefixed(method.encode("ascii")) + _length_prefixed(
            label.encode("ascii")
        )
        return (
            algorithm_id
            + _length_prefixed(party_u_info or b"")
            + _length_prefixed(party_v_info or b"")
            + struct.pack(">I", key_bit_length)
        )

    def derive(
        self,
        shared_secret: bytes,
        label: str,
        *,
        method: str,
        party_u_info: Optional[bytes] = None,
        party_v_info: Optional[bytes] = None,
        key_bit_length: int,
    ) -> bytes:
        """
        Вывести ключ длиной key_bit_length бит.

        Args:
            shared_secret: Общий секрет Z
            label: Метка назначения (CEK_LABEL / CIK_LABEL)
            method: Имя метода шифрования, часть AlgorithmID
            party_u_info: Опциональный "epu"
            party_v_info: Опциональный "epv"
            key_bit_length: Длина результата в битах (кратна 8)

        Returns:
            Производный ключ ровно key_bit_length бит

        Raises:
            ValueError: Некорректная длина ключа
            JOSEError: Ошибка библиотеки при выводе
        """
        if not isinstance(shared_secret, (bytes, bytearray)):
            raise TypeError(f"Shared secret must be bytes, got {type(shared_secret).__name__}")
        if key_bit_length <= 0 or key_bit_length % 8 != 0:
            raise ValueError(f"Key bit length must be a positive multiple of 8, got {key_bit_length}")

        otherinfo = self.other_info(
            label,
            method=method,
            party_u_info=party_u_info,
            party_v_info=party_v_info,
            key_bit_length=key_bit_length,
        )

        try:
            kdf = ConcatKDFHash(
                algorithm=_HASHES[self.hash_name](),
                length=key_bit_length // 8,
                otherinfo=otherinfo,
            )
            derived = kdf.derive(bytes(shared_secret))
        except (ValueError, TypeError) as exc:
            raise JOSEError(
                f"Concat KDF derivation failed for {method}", algorithm=method
            ) from exc

        logger.debug(
            "ConcatKDF-%s: derived %d-bit key (label=%s, method=%s)",
            self.hash_name,
            key_bit_length,
            label,
            method,
        )
        return derived


@dataclass(repr=False)
class DerivedKeySet:
    """
    Пара производных ключей (CEK, CIK) одного вызова.

    Используется как context manager: при выходе буферы зануляются.

    Example:
        >>> with derive_key_set(master_key, EncryptionMethod.A128CBC_HS256) as keys:
        ...     mac = hmac.new(keys.cik, data, "sha256").digest()
    """

    cek: bytearray
    cik: bytearray
    _wiped: bool = field(default=False, init=False)

    def wipe(self) -> None:
        """Best-effort зануление обоих ключей."""
        zero_memory(self.cek)
        zero_memory(self.cik)
        self._wiped = True

    def __enter__(self) -> "DerivedKeySet":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.wipe()

    def __repr__(self) -> str:
        return f"DerivedKeySet(cek_bits={len(self.cek) * 8}, cik_bits={len(self.cik) * 8})"


def derive_key_set(
    master_key: bytes,
    method: EncryptionMethod,
    *,
    party_u_info: Optional[bytes] = None,
    party_v_info: Optional[bytes] = None,
) -> DerivedKeySet:
    """
    Вывести CEK и CIK для композитного метода.

    Raises:
        UnsupportedAlgorithmError: Метод не является A*CBC-HS*
    """
    spec = ENCRYPTION_METHODS[method]
    if spec.aead or spec.hash_name is None:
        raise UnsupportedAlgorithmError(
            f"Concat KDF is not used with {method.value}", algorithm=method.value
        )

    kdf = ConcatKDF(spec.hash_name)
    cek = kdf.derive(
        master_key,
        CEK_LABEL,
        method=method.value,
        party_u_info=party_u_info,
        party_v_info=party_v_info,
        key_bit_length=spec.cek_bits,
    )
    cik = kdf.derive(
        master_key,
        CIK_LABEL,
        method=method.value,
        party_u_info=party_u_info,
        party_v_info=party_v_info,
        key_bit_length=spec.cik_bits,
    )
    return DerivedKeySet(cek=bytearray(cek), cik=bytearray(cik))
