"""Incremental decoder for HTTP chunked transfer encoding."""

from __future__ import annotations

STATE_HAS_SIZE = 0x80000000
STATE_IS_CHUNKED = 0x40000000
STATE_SIZE_MASK = 0x3FFFFFFF
STATE_IS_ERROR = 0xFFFFFFFF
STATE_SIZE_OVERFLOW = 0x0F000000


class ChunkedEncodingError(ValueError):
    """Raised when a chunk size line is malformed or too large."""


class ChunkedDecoder:
    """Stateful chunked-body parser.

    ``feed`` returns the payload pieces found in the given bytes. An empty
    piece marks the terminating zero-size chunk. Once the body's final
    line (or trailer, when *trailer* is set) is consumed, parsing stops and
    any bytes that follow are kept in :meth:`remainder`.
    """

    def __init__(self, trailer: bool = False) -> None:
        self._trailer = trailer
        self._state = 0
        self._remainder = b""

    def _size(self) -> int:
        return self._state & STATE_SIZE_MASK

    def _has_size(self) -> bool:
        return bool(self._state & STATE_HAS_SIZE)

    def _dec_size(self, by: int) -> None:
        self._state = (self._state & ~STATE_SIZE_MASK & 0xFFFFFFFF) | (self._size() - by)

    def in_progress(self) -> bool:
        """True while in the middle of a chunked body."""
        return bool(self._state & ~STATE_SIZE_MASK & 0xFFFFFFFF)

    def remainder(self) -> bytes:
        """Bytes from the last feed that were left unconsumed."""
        return self._remainder

    def feed(self, data: bytes) -> list[bytes]:
        """Consume *data* and return the chunk payloads it completes or continues."""
        if self._state == STATE_IS_ERROR:
            raise ChunkedEncodingError("decoder is in an error state")
        view = memoryview(bytes(data))
        chunks: list[bytes] = []
        while True:
            chunk, view = self._next_chunk(view)
            if chunk is None:
                break
            chunks.append(chunk)
        self._remainder = bytes(view)
        if self._state == STATE_IS_ERROR:
            raise ChunkedEncodingError("invalid chunk size")
        return chunks

    def _consume_hex(self, view: memoryview) -> memoryview:
        pos = 0
        end = len(view)
        while pos < end and 32 < view[pos] < 128:
            digit = view[pos]
            if digit >= ord("a"):
                digit -= ord("a") - ord(":")
            elif digit >= ord("A"):
                digit -= ord("A") - ord(":")
            number = digit - ord("0")
            if number < 0 or number > 16 or (self._size() & STATE_SIZE_OVERFLOW):
                self._state = STATE_IS_ERROR
                return view[pos:]
            self._state = ((self._state & STATE_SIZE_MASK) * 16 + number) | STATE_IS_CHUNKED
            pos += 1
        while pos < end and view[pos] != ord("\n"):
            pos += 1
        if pos < end:
            self._state = (self._state + 2) | STATE_HAS_SIZE | STATE_IS_CHUNKED
            pos += 1
        return view[pos:]

    def _next_chunk(self, view: memoryview) -> tuple[bytes | None, memoryview]:
        while len(view):
            # Dropping the final CRLF or trailer bytes.
            if not (self._state & STATE_IS_CHUNKED) and self._has_size() and self._size():
                drop = min(len(view), self._size())
                view = view[drop:]
                self._dec_size(drop)
                if self._size() == 0:
                    self._state = 0
                    return None, view
                continue

            if not self._has_size():
                view = self._consume_hex(view)
                if self._state == STATE_IS_ERROR:
                    return None, view
                if self._has_size() and self._size() == 2:
                    self._state = (4 if self._trailer else 2) | STATE_HAS_SIZE
                    return b"", view
                continue

            size = self._size()
            if len(view) >= size:
                emit = bytes(view[: size - 2]) if size > 2 else None
                view = view[size:]
                self._state = STATE_IS_CHUNKED
                if emit is not None:
                    return emit, view
                continue

            emit = b""
            if size > 2:
                emit = bytes(view[: min(len(view), size - 2)])
            self._dec_size(len(view))
            self._state |= STATE_IS_CHUNKED
            view = view[len(view):]
            return (emit if emit else None), view

        return None, view