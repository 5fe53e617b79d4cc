"""Tests for JWS/JWE protected headers."""

from __future__ import annotations

import pytest

from src.jose.core.base64url import Base64URL
from src.jose.core.exceptions import ValidationError
from src.jose.core.header import JWEHeader, JWSHeader


class TestJWSHeader:
    def test_serialized(self) -> None:
        assert JWSHeader("HS256").serialized == "eyJhbGciOiJIUzI1NiJ9"

    def test_frozen(self) -> None:
        header = JWSHeader("HS256")
        with pytest.raises(AttributeError):
            header.algorithm = "HS512"  # type: ignore[misc]


class TestJWEHeader:
    def test_serialized_gcm(self) -> None:
        header = JWEHeader("dir", "A128GCM")
        assert header.serialized == "eyJhbGciOiJkaXIiLCJlbmMiOiJBMTI4R0NNIn0"

    def test_serialized_cbc(self) -> None:
        header = JWEHeader("dir", "A128CBC-HS256")
        assert header.serialized == "eyJhbGciOiJkaXIiLCJlbmMiOiJBMTI4Q0JDLUhTMjU2In0"

    def test_serialized_with_party_info(self) -> None:
        header = JWEHeader("dir", "A128CBC-HS256", party_u_info=b"Alice", party_v_info=b"Bob")
        assert header.serialized == (
            "eyJhbGciOiJkaXIiLCJlbmMiOiJBMTI4Q0JDLUhTMjU2IiwiZXB1IjoiUVd4cFkyVSIsImVwdiI6IlFtOWkifQ"
        )

    def test_to_json_object_omits_unset(self) -> None:
        assert JWEHeader("dir", "A256GCM").to_json_object() == {"alg": "dir", "enc": "A256GCM"}

    def test_to_json_object_with_zip(self) -> None:
        header = JWEHeader("dir", "A256GCM", compression_algorithm="DEF")
        assert header.to_json_object()["zip"] == "DEF"

    def test_parse_round_trip(self) -> None:
        original = JWEHeader("dir", "A128CBC-HS256", party_u_info=b"Alice", party_v_info=b"Bob")
        parsed = JWEHeader.parse(original.serialized)

        assert parsed.algorithm == "dir"
        assert parsed.encryption_method == "A128CBC-HS256"
        assert parsed.party_u_info == b"Alice"
        assert parsed.party_v_info == b"Bob"
        assert parsed.serialized == original.serialized

    def test_parse_keeps_original_text(self) -> None:
        # Non-canonical key order must survive untouched for AAD purposes.
        text = Base64URL.from_bytes(b'{"enc":"A128GCM","alg":"dir"}')
        parsed = JWEHeader.parse(text)

        assert parsed.serialized == text
        assert parsed.serialized != JWEHeader("dir", "A128GCM").serialized

    @pytest.mark.parametrize(
        "payload",
        [b"not json", b"[1, 2]", b'{"alg":"dir"}', b'{"enc":"A128GCM"}'],
    )
    def test_parse_invalid(self, payload: bytes) -> None:
        with pytest.raises(ValidationError):
            JWEHeader.parse(Base64URL.from_bytes(payload))
