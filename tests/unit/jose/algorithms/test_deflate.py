"""Tests for the raw DEFLATE codec."""

from __future__ import annotations

import zlib

import pytest

from src.jose.algorithms.deflate import DeflateCodec
from src.jose.core.protocols import CompressionCodecProtocol


@pytest.fixture
def codec() -> DeflateCodec:
    return DeflateCodec()


class TestDeflateCodec:
    def test_protocol(self, codec: DeflateCodec) -> None:
        assert isinstance(codec, CompressionCodecProtocol)

    def test_round_trip(self, codec: DeflateCodec) -> None:
        data = b"Live long and prosper. " * 100
        compressed = codec.compress(data)

        assert len(compressed) < len(data)
        assert codec.decompress(compressed, 1 << 20) == data

    def test_raw_stream_without_zlib_header(self, codec: DeflateCodec) -> None:
        raw = zlib.compressobj(9, zlib.DEFLATED, -15)
        compressed = raw.compress(b"payload") + raw.flush()
        assert codec.decompress(compressed, 1024) == b"payload"

    def test_corrupted_stream(self, codec: DeflateCodec) -> None:
        with pytest.raises(zlib.error):
            codec.decompress(b"\xff" * 32, 1024)

    def test_truncated_stream(self, codec: DeflateCodec) -> None:
        compressed = codec.compress(b"x" * 1000 + bytes(range(256)))
        with pytest.raises(ValueError, match="Truncated"):
            codec.decompress(compressed[:-4], 1 << 20)

    def test_size_limit(self, codec: DeflateCodec) -> None:
        compressed = codec.compress(b"\x00" * 10_000)
        with pytest.raises(ValueError, match="exceeds"):
            codec.decompress(compressed, 1000)
