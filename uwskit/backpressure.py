"""Outgoing data buffered while a socket cannot accept more writes."""


class BackPressure:
    """Byte buffer whose front is dropped lazily as data is written out.

    Removal is postponed until the pending amount exceeds 1/32 of the
    buffer, so repeated small erases do not shift the whole buffer.
    """

    def __init__(self, data: bytes = b"") -> None:
        self._buffer = bytearray(data)
        self._pending_removal = 0

    def append(self, data: bytes) -> None:
        """Add data to the end of the buffer."""
        self._buffer += data

    def erase(self, length: int) -> None:
        """Mark *length* bytes at the front as written."""
        if length < 0:
            raise ValueError("length must not be negative")
        self._pending_removal += length
        if self._pending_removal > (len(self._buffer) >> 5):
            del self._buffer[: self._pending_removal]
            self._pending_removal = 0

    def clear(self) -> None:
        """Drop everything, including pending removals."""
        self._pending_removal = 0
        self._buffer.clear()

    def resize(self, length: int) -> None:
        """Truncate or zero-pad so that *length* live bytes remain."""
        if length < 0:
            raise ValueError("length must not be negative")
        target = length + self._pending_removal
        if target < len(self._buffer):
            del self._buffer[target:]
        else:
            self._buffer.extend(bytes(target - len(self._buffer)))

    def data(self) -> bytes:
        """The bytes still waiting to be written."""
        return bytes(self._buffer[self._pending_removal:])

    def total_length(self) -> int:
        """Length of the underlying buffer, including pending removal."""
        return len(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer) - self._pending_removal