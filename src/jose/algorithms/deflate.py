"""
DEF сжатие (raw DEFLATE, RFC 1951) для JWE plaintext.

Кодек подключаемый: DirectDecrypter принимает любое отображение
"zip" → CompressionCodecProtocol. Ошибки zlib не перехватываются здесь,
их оборачивает вызывающая сторона в CompressionError.
"""

from __future__ import annotations

import zlib
from typing import Final

__all__ = ["DeflateCodec"]

_RAW_DEFLATE_WBITS: Final[int] = -15


class DeflateCodec:
    """Raw DEFLATE без zlib/gzip заголовков."""

    def compress(self, data: bytes) -> bytes:
        compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, _RAW_DEFLATE_WBITS)
        return compressor.compress(data) + compressor.flush()

    def decompress(self, data: bytes, max_size: int) -> bytes:
        """
        Распаковать данные.

        Raises:
            zlib.error: Повреждённый поток
            ValueError: Поток обрезан или результат больше max_size
        """
        decompressor = zlib.decompressobj(_RAW_DEFLATE_WBITS)
        output = decompressor.decompress(data, max_size + 1)
        if len(output) > max_size:
            raise ValueError(f"Decompressed size exceeds {max_size} bytes")
        output += decompressor.flush()
        if not decompressor.eof:
            raise ValueError("Truncated DEFLATE stream")
        return output
