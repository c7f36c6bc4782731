"""Per-response state kept alongside an HTTP socket."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Callable, Optional

from uwskit.backpressure import BackPressure


class ResponseState(IntFlag):
    """Bits describing how far a response has progressed."""

    STATUS_CALLED = 1
    WRITE_CALLED = 2
    END_CALLED = 4
    RESPONSE_PENDING = 8
    CONNECTION_CLOSE = 16


def _placeholder_writable(_offset: int) -> bool:
    return True


@dataclass
class HttpResponseData:
    """Handlers, outgoing offset, state bits and backpressure for one response."""

    on_writable: Optional[Callable[[int], bool]] = None
    on_aborted: Optional[Callable[[], None]] = None
    on_data: Optional[Callable[[bytes, bool], None]] = None
    offset: int = 0
    received_bytes_per_timeout: int = 0
    state: ResponseState = ResponseState(0)
    buffer: BackPressure = field(default_factory=BackPressure)

    def mark_done(self) -> None:
        """Drop abort and writable handlers and clear the pending bit."""
        self.on_aborted = None
        self.on_writable = None
        self.state &= ~ResponseState.RESPONSE_PENDING

    def call_on_writable(self, offset: int) -> bool:
        """Call the writable handler, which may itself call :meth:`mark_done`."""
        borrowed = self.on_writable
        if borrowed is None:
            raise RuntimeError("no writable handler is set")
        self.on_writable = _placeholder_writable
        result = borrowed(offset)
        if self.on_writable is not None:
            self.on_writable = borrowed
        return result