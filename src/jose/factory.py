"""
Диспетчеризация алгоритмов: подбор верификатора / расшифровщика по ключу.

Функции без состояния: каждый вызов проверяет совместимость алгоритма
заголовка с формой ключа и возвращает новый привязанный объект, либо
бросает типизированную ошибку до любой криптографической операции.

Правила JWS:
    ===========================  ===================================
    Алгоритм                     Требуемый ключ
    ===========================  ===================================
    HS256 / HS384 / HS512        Секрет ≥ 256 / 384 / 512 бит
    RS* / PS*                    RSA public key (любой размер модуля)
    ES256 / ES384 / ES512        EC public key на P-256 / P-384 / P-521
    ===========================  ===================================

Example:
    >>> verifier = create_jws_verifier(JWSHeader("ES256"), p256_public_key)
    >>> verifier.family
    <AlgorithmFamily.EC: 'EC'>
    >>> create_jws_verifier(JWSHeader("xxx"), secret)
    Traceback (most recent call last):
    UnsupportedAlgorithmError: Unsupported JWS algorithm: xxx
"""

from __future__ import annotations

import logging
from typing import Optional

from src.jose.config import JOSEConfig
from src.jose.core.algorithms import (
    JWS_ALGORITHMS,
    AlgorithmFamily,
    JWEAlgorithm,
    resolve_jws_algorithm,
)
from src.jose.core.exceptions import KeyTypeError, UnsupportedAlgorithmError
from src.jose.core.header import JWEHeader, JWSHeader
from src.jose.core.keys import as_secret_key, describe_key
from src.jose.jwe import DirectDecrypter
from src.jose.jws import ECDSAVerifier, JWSVerifier, MACVerifier, RSASSAVerifier

logger = logging.getLogger(__name__)

__all__ = [
    "create_jws_verifier",
    "create_jwe_decrypter",
]

_VERIFIERS: dict[AlgorithmFamily, type[JWSVerifier]] = {
    AlgorithmFamily.HMAC: MACVerifier,
    AlgorithmFamily.RSA: RSASSAVerifier,
    AlgorithmFamily.EC: ECDSAVerifier,
}


def create_jws_verifier(header: JWSHeader, key: object) -> JWSVerifier:
    """
    Создать верификатор для алгоритма заголовка.

    Args:
        header: JWS заголовок
        key: SecretKey / bytes, RSAPublicKey или EllipticCurvePublicKey

    Returns:
        Верификатор с supported_algorithms == {header.algorithm}

    Raises:
        UnsupportedAlgorithmError: "Unsupported JWS algorithm: <name>"
        KeyTypeError: Форма ключа не подходит алгоритму
    """
    algorithm = resolve_jws_algorithm(header.algorithm)
    if algorithm is None:
        raise UnsupportedAlgorithmError(
            f"Unsupported JWS algorithm: {header.algorithm}", algorithm=header.algorithm
        )

    family = JWS_ALGORITHMS[algorithm].family
    verifier = _VERIFIERS[family](algorithm, key)  # type: ignore[arg-type]

    logger.debug(
        "Created %s for %s (key family: %s)",
        verifier.__class__.__name__,
        algorithm.value,
        describe_key(key).family.value,
    )
    return verifier


def create_jwe_decrypter(
    header: JWEHeader,
    key: object,
    *,
    config: Optional[JOSEConfig] = None,
) -> DirectDecrypter:
    """
    Создать расшифровщик для режима управления ключами заголовка.

    Raises:
        UnsupportedAlgorithmError: "Unsupported JWE algorithm: <name>"
        KeyTypeError: Ключ не симметричный
    """
    if header.algorithm != JWEAlgorithm.DIR.value:
        raise UnsupportedAlgorithmError(
            f"Unsupported JWE algorithm: {header.algorithm}", algorithm=header.algorithm
        )

    if as_secret_key(key) is None:
        actual = describe_key(key).family.value
        raise KeyTypeError(
            f"{header.algorithm} requires a symmetric secret key, got {actual}",
            algorithm=header.algorithm,
            expected="oct",
            actual=actual,
        )

    return DirectDecrypter(key, config=config)
