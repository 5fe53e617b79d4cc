"""
Модуль объединяет JOSE криптографию: диспетчеризацию JWS верификаторов и
direct-режим JWE (AES-GCM, AES-CBC + HMAC с Concat KDF).
EN: Top-level JOSE API. Single import point for verifier dispatch and
direct-mode JWE encryption/decryption.
"""

from src.jose.config import JOSEConfig, SecurityProfile
from src.jose.core.algorithms import (
    AlgorithmFamily,
    CompressionAlgorithm,
    EncryptionMethod,
    JWEAlgorithm,
    JWSAlgorithm,
)
from src.jose.core.base64url import Base64URL
from src.jose.core.exceptions import (
    CompressionError,
    DecryptionError,
    IntegrityError,
    JOSEError,
    KeyLengthError,
    KeyTypeError,
    UnsupportedAlgorithmError,
    ValidationError,
)
from src.jose.core.header import JWEHeader, JWSHeader
from src.jose.core.keys import KeyFamily, SecretKey
from src.jose.core.parts import JWEParts
from src.jose.factory import create_jwe_decrypter, create_jws_verifier
from src.jose.jwe import DirectDecrypter, DirectEncrypter
from src.jose.jws import ECDSAVerifier, JWSVerifier, MACVerifier, RSASSAVerifier

__all__ = [
    # Configuration
    "JOSEConfig",
    "SecurityProfile",
    # Identifiers
    "AlgorithmFamily",
    "CompressionAlgorithm",
    "EncryptionMethod",
    "JWEAlgorithm",
    "JWSAlgorithm",
    # Data model
    "Base64URL",
    "JWEHeader",
    "JWSHeader",
    "JWEParts",
    "KeyFamily",
    "SecretKey",
    # Errors
    "JOSEError",
    "ValidationError",
    "KeyTypeError",
    "KeyLengthError",
    "UnsupportedAlgorithmError",
    "IntegrityError",
    "CompressionError",
    "DecryptionError",
    # Dispatch
    "create_jws_verifier",
    "create_jwe_decrypter",
    # Verifiers
    "JWSVerifier",
    "MACVerifier",
    "RSASSAVerifier",
    "ECDSAVerifier",
    # Direct JWE
    "DirectDecrypter",
    "DirectEncrypter",
]
"""
Example: Encrypt and decrypt with a shared key
from src.jose import DirectEncrypter, DirectDecrypter, JWEHeader
header = JWEHeader("dir", "A256GCM")
parts = DirectEncrypter(key).encrypt(header, b'Sensitive data')
plaintext = DirectDecrypter(key).decrypt(header, parts)
"""
