"""
Tests for the composite AES-CBC + HMAC engine.

Coverage:
- Known-answer message (A128CBC-HS256, key 00..1f)
- MAC input composition over wire text
- Tag/ciphertext/IV tampering → IntegrityError before decryption
- Party info binding
"""

from __future__ import annotations

import os

import pytest

from src.jose.algorithms.aes_cbc_hmac import AESCBCHMACEngine, compose_mac_input
from src.jose.algorithms.concat_kdf import derive_key_set
from src.jose.core.algorithms import EncryptionMethod
from src.jose.core.base64url import Base64URL
from src.jose.core.exceptions import (
    DecryptionError,
    IntegrityError,
    UnsupportedAlgorithmError,
    ValidationError,
)
from src.jose.core.header import JWEHeader

MASTER_KEY = bytes(range(32))
IV = bytes(range(16))
PLAINTEXT = b"Live long and prosper."

# Header {"alg":"dir","enc":"A128CBC-HS256"}; CEK/CIK from Concat KDF over MASTER_KEY
KAT_HEADER = "eyJhbGciOiJkaXIiLCJlbmMiOiJBMTI4Q0JDLUhTMjU2In0"
KAT_IV = Base64URL("AAECAwQFBgcICQoLDA0ODw")
KAT_CIPHERTEXT = Base64URL("_Hb1mbsT1rfnwKnf9bGvpYCUC6Oyq_H4R7KKnLn2Li0")
KAT_TAG = Base64URL("TdLMB3bhLEHkGRZGRBdAlA")


@pytest.fixture
def header() -> JWEHeader:
    return JWEHeader("dir", "A128CBC-HS256")


@pytest.fixture
def engine() -> AESCBCHMACEngine:
    return AESCBCHMACEngine(EncryptionMethod.A128CBC_HS256)


def _flip(text: Base64URL, index: int) -> Base64URL:
    raw = bytearray(text.decode())
    raw[index] ^= 0x01
    return Base64URL.from_bytes(bytes(raw))


class TestKnownAnswer:
    def test_header_serialization(self, header: JWEHeader) -> None:
        assert header.serialized == KAT_HEADER

    def test_encrypt(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        result = engine.encrypt(MASTER_KEY, PLAINTEXT, IV, header=header)

        assert Base64URL.from_bytes(result.ciphertext) == KAT_CIPHERTEXT
        assert Base64URL.from_bytes(result.auth_tag) == KAT_TAG

    def test_decrypt(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        plaintext = engine.decrypt(
            MASTER_KEY,
            header=header,
            encrypted_key_text="",
            iv=KAT_IV,
            ciphertext=KAT_CIPHERTEXT,
            auth_tag=KAT_TAG.decode(),
        )
        assert plaintext == PLAINTEXT


class TestTampering:
    def test_flipped_tag(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        with pytest.raises(IntegrityError, match="HMAC integrity check failed"):
            engine.decrypt(
                MASTER_KEY,
                header=header,
                encrypted_key_text="",
                iv=KAT_IV,
                ciphertext=KAT_CIPHERTEXT,
                auth_tag=_flip(KAT_TAG, 15).decode(),
            )

    def test_flipped_ciphertext(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        with pytest.raises(IntegrityError):
            engine.decrypt(
                MASTER_KEY,
                header=header,
                encrypted_key_text="",
                iv=KAT_IV,
                ciphertext=_flip(KAT_CIPHERTEXT, 31),
                auth_tag=KAT_TAG.decode(),
            )

    def test_flipped_iv(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        with pytest.raises(IntegrityError):
            engine.decrypt(
                MASTER_KEY,
                header=header,
                encrypted_key_text="",
                iv=_flip(KAT_IV, 0),
                ciphertext=KAT_CIPHERTEXT,
                auth_tag=KAT_TAG.decode(),
            )

    def test_encrypted_key_text_is_authenticated(
        self, engine: AESCBCHMACEngine, header: JWEHeader
    ) -> None:
        with pytest.raises(IntegrityError):
            engine.decrypt(
                MASTER_KEY,
                header=header,
                encrypted_key_text="AA",
                iv=KAT_IV,
                ciphertext=KAT_CIPHERTEXT,
                auth_tag=KAT_TAG.decode(),
            )

    def test_truncated_tag(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        with pytest.raises(IntegrityError):
            engine.decrypt(
                MASTER_KEY,
                header=header,
                encrypted_key_text="",
                iv=KAT_IV,
                ciphertext=KAT_CIPHERTEXT,
                auth_tag=KAT_TAG.decode()[:8],
            )

    def test_wrong_key(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        with pytest.raises(IntegrityError):
            engine.decrypt(
                bytes(32),
                header=header,
                encrypted_key_text="",
                iv=KAT_IV,
                ciphertext=KAT_CIPHERTEXT,
                auth_tag=KAT_TAG.decode(),
            )


class TestBadPadding:
    def test_valid_tag_bad_padding(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        """A correctly tagged cipher text with broken padding is a decryption error."""
        # Zero block decrypts to ...2c under the derived CEK: invalid PKCS#7
        bogus = Base64URL.from_bytes(bytes(16))

        with derive_key_set(MASTER_KEY, EncryptionMethod.A128CBC_HS256) as keys:
            tag = engine.compute_tag(
                keys.cik, compose_mac_input(KAT_HEADER, "", KAT_IV, bogus)
            )

        with pytest.raises(DecryptionError):
            engine.decrypt(
                MASTER_KEY,
                header=header,
                encrypted_key_text="",
                iv=KAT_IV,
                ciphertext=bogus,
                auth_tag=tag,
            )


class TestRoundTrip:
    @pytest.mark.parametrize("length", [0, 1, 16, 33])
    @pytest.mark.parametrize(
        "method, key_size, tag_size",
        [
            (EncryptionMethod.A128CBC_HS256, 32, 16),
            (EncryptionMethod.A256CBC_HS512, 64, 32),
        ],
    )
    def test_lengths(
        self, method: EncryptionMethod, key_size: int, tag_size: int, length: int
    ) -> None:
        engine = AESCBCHMACEngine(method)
        header = JWEHeader("dir", method.value)
        key = os.urandom(key_size)
        iv = os.urandom(16)
        plaintext = os.urandom(length)

        result = engine.encrypt(key, plaintext, iv, header=header)

        assert len(result.auth_tag) == tag_size == engine.tag_size
        assert len(result.ciphertext) % 16 == 0
        assert len(result.ciphertext) > length
        assert (
            engine.decrypt(
                key,
                header=header,
                encrypted_key_text="",
                iv=Base64URL.from_bytes(iv),
                ciphertext=Base64URL.from_bytes(result.ciphertext),
                auth_tag=result.auth_tag,
            )
            == plaintext
        )

    def test_party_info_bound_to_keys(self, engine: AESCBCHMACEngine) -> None:
        sender = JWEHeader("dir", "A128CBC-HS256", party_u_info=b"Alice", party_v_info=b"Bob")
        result = engine.encrypt(MASTER_KEY, PLAINTEXT, IV, header=sender)

        # Same serialized header text, different party info: keys differ
        receiver = JWEHeader(
            "dir",
            "A128CBC-HS256",
            party_u_info=b"Mallory",
            party_v_info=b"Bob",
            serialized=sender.serialized,
        )
        with pytest.raises(IntegrityError):
            engine.decrypt(
                MASTER_KEY,
                header=receiver,
                encrypted_key_text="",
                iv=Base64URL.from_bytes(IV),
                ciphertext=Base64URL.from_bytes(result.ciphertext),
                auth_tag=result.auth_tag,
            )


class TestValidation:
    def test_gcm_method_rejected(self) -> None:
        with pytest.raises(UnsupportedAlgorithmError):
            AESCBCHMACEngine(EncryptionMethod.A128GCM)

    def test_invalid_iv_length(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        with pytest.raises(ValidationError):
            engine.encrypt(MASTER_KEY, PLAINTEXT, bytes(12), header=header)

    def test_invalid_iv_on_decrypt(self, engine: AESCBCHMACEngine, header: JWEHeader) -> None:
        with pytest.raises(ValidationError):
            engine.decrypt(
                MASTER_KEY,
                header=header,
                encrypted_key_text="",
                iv=Base64URL.from_bytes(bytes(12)),
                ciphertext=KAT_CIPHERTEXT,
                auth_tag=KAT_TAG.decode(),
            )


class TestComposeMacInput:
    def test_direct_mode_has_empty_key_segment(self) -> None:
        assert compose_mac_input("H", "", "IV", "CT") == b"H..IV.CT"
