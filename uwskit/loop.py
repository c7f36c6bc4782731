"""Per-thread event loop with pre/post iteration handlers and deferred callbacks."""

from __future__ import annotations

import threading
from typing import Any, Callable, Hashable

LoopHandler = Callable[["Loop"], Any]

_local = threading.local()


class Loop:
    """A loop whose iterations run pre handlers, deferred callbacks, then post handlers.

    :meth:`defer` may be called from any thread; the callback runs on the
    thread that runs the loop. :meth:`run` blocks until :meth:`stop`.
    """

    def __init__(self) -> None:
        self._pre_handlers: dict[Hashable, LoopHandler] = {}
        self._post_handlers: dict[Hashable, LoopHandler] = {}
        self._defer_queues: tuple[list[Callable[[], Any]], list[Callable[[], Any]]] = ([], [])
        self._current_queue = 0
        self._defer_lock = threading.Lock()
        self._wakeup = threading.Event()
        self._stop_requested = False
        self._freed = False

    def _check_alive(self) -> None:
        if self._freed:
            raise RuntimeError("loop has been freed")

    def add_pre_handler(self, key: Hashable, handler: LoopHandler) -> None:
        """Register a handler run at the start of every iteration; an existing key is kept."""
        self._check_alive()
        self._pre_handlers.setdefault(key, handler)

    def remove_pre_handler(self, key: Hashable) -> None:
        """Remove the pre handler under *key*, if any."""
        self._pre_handlers.pop(key, None)

    def add_post_handler(self, key: Hashable, handler: LoopHandler) -> None:
        """Register a handler run at the end of every iteration; an existing key is kept."""
        self._check_alive()
        self._post_handlers.setdefault(key, handler)

    def remove_post_handler(self, key: Hashable) -> None:
        """Remove the post handler under *key*, if any."""
        self._post_handlers.pop(key, None)

    def defer(self, callback: Callable[[], Any]) -> None:
        """Queue *callback* to run on the loop's thread and wake the loop."""
        self._check_alive()
        with self._defer_lock:
            self._defer_queues[self._current_queue].append(callback)
        self._wakeup.set()

    def _drain_deferred(self) -> int:
        with self._defer_lock:
            old = self._current_queue
            self._current_queue = (old + 1) % 2
        queue = self._defer_queues[old]
        for callback in queue:
            callback()
        count = len(queue)
        queue.clear()
        return count

    def iterate(self) -> int:
        """Run one iteration and return how many deferred callbacks ran."""
        self._check_alive()
        self._wakeup.clear()
        for handler in list(self._pre_handlers.values()):
            handler(self)
        count = self._drain_deferred()
        for handler in list(self._post_handlers.values()):
            handler(self)
        return count

    def run(self) -> None:
        """Block, iterating whenever woken, until :meth:`stop` is called."""
        self._check_alive()
        try:
            while not self._stop_requested:
                self._wakeup.wait()
                if self._freed:
                    break
                self.iterate()
        finally:
            self._stop_requested = False

    def stop(self) -> None:
        """Make :meth:`run` return after the current iteration."""
        self._stop_requested = True
        self._wakeup.set()

    def free(self) -> None:
        """Release the loop; it can no longer be used."""
        self._freed = True
        self._pre_handlers.clear()
        self._post_handlers.clear()
        for queue in self._defer_queues:
            queue.clear()
        self._wakeup.set()
        if getattr(_local, "loop", None) is self:
            _local.loop = None


def get_loop() -> Loop:
    """Return this thread's loop, creating it on first use."""
    loop = getattr(_local, "loop", None)
    if loop is None:
        loop = Loop()
        _local.loop = loop
    return loop