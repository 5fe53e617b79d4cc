"""
Верификаторы JWS подписей, привязанные к ключу.

Каждый верификатор это вариант с явным тегом семейства:

    - MACVerifier      (AlgorithmFamily.HMAC) → secret
    - RSASSAVerifier   (AlgorithmFamily.RSA)  → public_key
    - ECDSAVerifier    (AlgorithmFamily.EC)   → public_key

supported_algorithms содержит ровно один алгоритм, к которому привязан
верификатор. Проверка формы ключа выполняется в конструкторе, до любой
криптографической операции.

Проверка подписи:
    - HMAC: пересчёт MAC и сравнение в константное время
    - RSA: RSASSA-PKCS1-v1_5 (RS*) или RSASSA-PSS с salt = длина хеша (PS*)
    - ECDSA: подпись в JWS формате R || S (RFC 7518 §3.4)

Асимметричные примитивы выполняет библиотека cryptography.

Example:
    >>> verifier = MACVerifier(JWSAlgorithm.HS256, secret)
    >>> verifier.verify(JWSHeader("HS256"), signing_input, signature)
    True
"""

from __future__ import annotations

import hmac
import logging
from typing import ClassVar, FrozenSet, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from src.jose.core.algorithms import JWS_ALGORITHMS, AlgorithmFamily, JWSAlgorithm
from src.jose.core.exceptions import KeyLengthError, KeyTypeError, UnsupportedAlgorithmError
from src.jose.core.header import JWSHeader
from src.jose.core.keys import SecretKey, as_secret_key, describe_key
from src.jose.utils import constant_time_equals

logger = logging.getLogger(__name__)

__all__ = [
    "JWSVerifier",
    "MACVerifier",
    "RSASSAVerifier",
    "ECDSAVerifier",
]

_HASHES: dict[str, type[hashes.HashAlgorithm]] = {
    "SHA256": hashes.SHA256,
    "SHA384": hashes.SHA384,
    "SHA512": hashes.SHA512,
}


class JWSVerifier:
    """
    Базовый верификатор: алгоритм + семейство + привязанный ключ.

    Attributes:
        family: Тег семейства (HMAC / RSA / EC)
        algorithm: Привязанный JWS алгоритм
    """

    family: ClassVar[AlgorithmFamily]

    def __init__(self, algorithm: JWSAlgorithm) -> None:
        spec = JWS_ALGORITHMS.get(algorithm)
        if spec is None or spec.family is not self.family:
            raise UnsupportedAlgorithmError(
                f"Unsupported JWS algorithm: {getattr(algorithm, 'value', algorithm)}",
                algorithm=str(getattr(algorithm, "value", algorithm)),
            )
        self.algorithm = algorithm
        self._spec = spec

    @property
    def supported_algorithms(self) -> FrozenSet[str]:
        return frozenset({self.algorithm.value})

    @property
    def key(self) -> object:
        """Привязанный ключ (секрет или публичный ключ)."""
        raise NotImplementedError

    def _check_header(self, header: JWSHeader) -> None:
        if header.algorithm not in self.supported_algorithms:
            raise UnsupportedAlgorithmError(
                f"Unsupported JWS algorithm: {header.algorithm}", algorithm=header.algorithm
            )

    def _hash(self) -> hashes.HashAlgorithm:
        return _HASHES[self._spec.hash_name]()

    def verify(self, header: JWSHeader, signing_input: bytes, signature: bytes) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(algorithm={self.algorithm.value})"


class MACVerifier(JWSVerifier):
    """HMAC верификатор (HS256 / HS384 / HS512)."""

    family = AlgorithmFamily.HMAC

    def __init__(self, algorithm: JWSAlgorithm, key: Union[SecretKey, bytes]) -> None:
        super().__init__(algorithm)
        secret = as_secret_key(key)
        if secret is None:
            raise KeyTypeError(
                f"{algorithm.value} requires a symmetric secret key, "
                f"got {describe_key(key).family.value}",
                algorithm=algorithm.value,
                expected="oct",
                actual=describe_key(key).family.value,
            )
        if secret.bit_length < self._spec.min_key_bits:
            raise KeyLengthError(
                algorithm.value,
                expected_bits=self._spec.min_key_bits,
                actual_bits=secret.bit_length,
                minimum=True,
            )
        self._secret = secret

    @property
    def secret(self) -> bytes:
        """Байты привязанного секрета."""
        return self._secret.secret

    @property
    def key(self) -> SecretKey:
        return self._secret

    def verify(self, header: JWSHeader, signing_input: bytes, signature: bytes) -> bool:
        self._check_header(header)
        digest = self._spec.hash_name.lower()
        expected = hmac.new(self._secret.secret, signing_input, digest).digest()
        return constant_time_equals(expected, signature)


class RSASSAVerifier(JWSVerifier):
    """RSA верификатор (RS256..RS512, PS256..PS512); размер модуля не проверяется."""

    family = AlgorithmFamily.RSA

    def __init__(self, algorithm: JWSAlgorithm, public_key: rsa.RSAPublicKey) -> None:
        super().__init__(algorithm)
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise KeyTypeError(
                f"{algorithm.value} requires an RSA public key, "
                f"got {describe_key(public_key).family.value}",
                algorithm=algorithm.value,
                expected="RSA public key",
                actual=describe_key(public_key).family.value,
            )
        self._public_key = public_key

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self._public_key

    @property
    def key(self) -> rsa.RSAPublicKey:
        return self._public_key

    def verify(self, header: JWSHeader, signing_input: bytes, signature: bytes) -> bool:
        self._check_header(header)
        hash_algorithm = self._hash()
        if self._spec.pss:
            pad: padding.AsymmetricPadding = padding.PSS(
                mgf=padding.MGF1(hash_algorithm),
                salt_length=hash_algorithm.digest_size,
            )
        else:
            pad = padding.PKCS1v15()

        try:
            self._public_key.verify(signature, signing_input, pad, hash_algorithm)
            return True
        except InvalidSignature:
            logger.debug("%s: signature verification failed", self.algorithm.value)
            return False


class ECDSAVerifier(JWSVerifier):
    """ECDSA верификатор; кривая ключа должна точно совпадать с кривой алгоритма."""

    family = AlgorithmFamily.EC

    def __init__(self, algorithm: JWSAlgorithm, public_key: ec.EllipticCurvePublicKey) -> None:
        super().__init__(algorithm)
        descriptor = describe_key(public_key)
        if not isinstance(public_key, ec.EllipticCurvePublicKey):
            raise KeyTypeError(
                f"{algorithm.value} requires an EC public key, got {descriptor.family.value}",
                algorithm=algorithm.value,
                expected="EC public key",
                actual=descriptor.family.value,
            )
        if descriptor.curve != self._spec.curve:
            raise KeyTypeError(
                f"{algorithm.value} requires an EC key on curve {self._spec.curve}, "
                f"got {descriptor.curve}",
                algorithm=algorithm.value,
                expected=self._spec.curve,
                actual=descriptor.curve,
            )
        self._public_key = public_key

    @property
    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self._public_key

    @property
    def key(self) -> ec.EllipticCurvePublicKey:
        return self._public_key

    def verify(self, header: JWSHeader, signing_input: bytes, signature: bytes) -> bool:
        self._check_header(header)
        size = (self._public_key.curve.key_size + 7) // 8
        if len(signature) != 2 * size:
            return False

        r = int.from_bytes(signature[:size], "big")
        s = int.from_bytes(signature[size:], "big")
        try:
            self._public_key.verify(
                encode_dss_signature(r, s), signing_input, ec.ECDSA(self._hash())
            )
            return True
        except InvalidSignature:
            logger.debug("%s: signature verification failed", self.algorithm.value)
            return False
