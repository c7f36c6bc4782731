"""Per-message deflate streams for WebSocket compression."""

from __future__ import annotations

import zlib
from enum import IntEnum

COMPRESSOR_MASK = 0x00FF
DECOMPRESSOR_MASK = 0x0F00

# Every sync-flushed deflate block ends with these bytes; they are dropped
# from outgoing frames and appended again before inflating.
_SYNC_TAIL = b"\x00\x00\xff\xff"


class CompressOptions(IntEnum):
    """Compression settings packed into 16 bits.

    The low 8 bits describe the compressor as HIGH4(windowBits), LOW4(memLevel);
    bits 8-11 hold the decompressor's windowBits. The value 1 in either part
    means the shared (per-loop) stream is used, and 0 disables compression.
    Compressor and decompressor values may be combined with ``|``.
    """

    DISABLED = 0
    SHARED_COMPRESSOR = 1
    SHARED_DECOMPRESSOR = 1 << 8

    DEDICATED_DECOMPRESSOR_32KB = 15 << 8
    DEDICATED_DECOMPRESSOR_16KB = 14 << 8
    DEDICATED_DECOMPRESSOR_8KB = 13 << 8
    DEDICATED_DECOMPRESSOR_4KB = 12 << 8
    DEDICATED_DECOMPRESSOR_2KB = 11 << 8
    DEDICATED_DECOMPRESSOR_1KB = 10 << 8
    DEDICATED_DECOMPRESSOR_512B = 9 << 8
    DEDICATED_DECOMPRESSOR = 15 << 8

    DEDICATED_COMPRESSOR_3KB = 9 << 4 | 1
    DEDICATED_COMPRESSOR_4KB = 9 << 4 | 2
    DEDICATED_COMPRESSOR_8KB = 10 << 4 | 3
    DEDICATED_COMPRESSOR_16KB = 11 << 4 | 4
    DEDICATED_COMPRESSOR_32KB = 12 << 4 | 5
    DEDICATED_COMPRESSOR_64KB = 13 << 4 | 6
    DEDICATED_COMPRESSOR_128KB = 14 << 4 | 7
    DEDICATED_COMPRESSOR_256KB = 15 << 4 | 8
    DEDICATED_COMPRESSOR = 15 << 4 | 8


class InflationError(ValueError):
    """Raised when a payload is corrupt or inflates beyond the allowed size."""


class DeflationStream:
    """Raw deflate stream producing permessage-deflate payloads."""

    def __init__(self, compress_options: int) -> None:
        options = int(compress_options)
        self._window_bits = (options & COMPRESSOR_MASK) >> 4
        self._mem_level = options & 0xF
        if not 9 <= self._window_bits <= 15:
            raise ValueError(f"invalid compressor window bits: {self._window_bits}")
        if not 1 <= self._mem_level <= 9:
            raise ValueError(f"invalid compressor memory level: {self._mem_level}")
        self._compressor = self._new_compressor()

    def _new_compressor(self):
        return zlib.compressobj(
            zlib.Z_DEFAULT_COMPRESSION,
            zlib.DEFLATED,
            -self._window_bits,
            self._mem_level,
            zlib.Z_DEFAULT_STRATEGY,
        )

    def deflate(self, raw: bytes, reset: bool) -> bytes:
        """Compress *raw*, dropping the trailing sync marker; optionally reset the window."""
        if not raw:
            raise ValueError("an empty payload must not be deflated")
        out = self._compressor.compress(bytes(raw)) + self._compressor.flush(zlib.Z_SYNC_FLUSH)
        if reset:
            self._compressor = self._new_compressor()
        return out[: -len(_SYNC_TAIL)]


class InflationStream:
    """Raw inflate stream for permessage-deflate payloads."""

    def __init__(self, compress_options: int) -> None:
        self._window_bits = int(compress_options) >> 8
        if not 8 <= self._window_bits <= 15:
            raise ValueError(f"invalid decompressor window bits: {self._window_bits}")
        self._decompressor = self._new_decompressor()

    def _new_decompressor(self):
        return zlib.decompressobj(-self._window_bits)

    def inflate(self, compressed: bytes, max_payload_length: int, reset: bool) -> bytes:
        """Inflate one message; zero-length input is valid and yields no bytes."""
        if max_payload_length < 0:
            raise ValueError("max_payload_length must not be negative")
        try:
            out = self._decompressor.decompress(bytes(compressed) + _SYNC_TAIL, max_payload_length + 1)
        except zlib.error as exc:
            raise InflationError(f"corrupt deflate data: {exc}") from exc
        finally:
            if reset:
                self._decompressor = self._new_decompressor()
        if len(out) > max_payload_length:
            raise InflationError("inflated message exceeds the maximum payload length")
        return out