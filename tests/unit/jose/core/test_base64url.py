"""Tests for Base64URL wire text."""

from __future__ import annotations

import pytest

from src.jose.core.base64url import Base64URL
from src.jose.core.exceptions import ValidationError


class TestBase64URL:
    def test_encode_strips_padding(self) -> None:
        assert Base64URL.from_bytes(b"Alice") == "QWxpY2U"

    def test_url_safe_alphabet(self) -> None:
        text = Base64URL.from_bytes(b"\xfb\xff\xfe")
        assert text == "-__-"
        assert text.decode() == b"\xfb\xff\xfe"

    def test_empty(self) -> None:
        assert Base64URL.from_bytes(b"") == ""
        assert Base64URL("").decode() == b""

    def test_is_str(self) -> None:
        text = Base64URL.from_bytes(b"Bob")
        assert isinstance(text, str)
        assert f"{text}." == "Qm9i."

    @pytest.mark.parametrize("bad", ["QWxp=Y2U", "QWxpY2U+", "A", "QW xp", "QWxp\n"])
    def test_invalid_text(self, bad: str) -> None:
        with pytest.raises(ValidationError):
            Base64URL(bad).decode()

    def test_encode_rejects_str(self) -> None:
        with pytest.raises(TypeError):
            Base64URL.from_bytes("text")  # type: ignore[arg-type]
