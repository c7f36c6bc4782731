"""URL router matching method and path patterns to prioritised handlers."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Optional

MAX_URL_SEGMENTS = 100
HANDLER_MASK = 0x0FFFFFFF

Handler = Callable[["HttpRouter"], bool]


class Priority(IntEnum):
    """Handler priority; stored in the high bits of a handler id."""

    HIGH = 0xD0000000
    MEDIUM = 0xE0000000
    LOW = 0xF0000000


@dataclass(eq=False)
class _Node:
    name: str
    is_high_priority: bool = False
    children: list[_Node] = field(default_factory=list)
    handlers: list[int] = field(default_factory=list)


def _lexical_order(name: str) -> int:
    """Sort static names first, then parameters, then wildcards."""
    if name.startswith(":"):
        return 1
    if name.startswith("*"):
        return 0
    return 2


def _split_url(url: str) -> list[str]:
    """Split a path that starts on a slash into at most 100 segments."""
    segments: list[str] = []
    rest = url
    while rest and len(segments) < MAX_URL_SEGMENTS:
        rest = rest[1:]
        cut = rest.find("/")
        if cut < 0:
            cut = len(rest)
        segments.append(rest[:cut])
        rest = rest[cut:]
    return segments


class HttpRouter:
    """Tree router. Handlers take the router and return True when they handled the request.

    Among siblings, static segments are tried before ``:param`` segments,
    which are tried before ``*`` wildcards; high-priority routes come first.
    """

    UPPER_CASED_METHODS = (
        "GET", "POST", "HEAD", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH",
    )

    def __init__(self, user_data: Any = None) -> None:
        self.user_data = user_data
        self._handlers: list[Handler] = []
        self._root = _Node("rootNode")
        self._params: list[str] = []

    def parameters(self) -> tuple[str, ...]:
        """Route parameters captured by the current (or last) match."""
        return tuple(self._params)

    def _should_precede(self, parent: _Node, new: _Node, existing: _Node) -> bool:
        if new.is_high_priority != existing.is_high_priority:
            return new.is_high_priority
        return (
            bool(existing.name)
            and parent is not self._root
            and _lexical_order(existing.name) < _lexical_order(new.name)
        )

    def _get_node(self, parent: _Node, child: str, is_high_priority: bool) -> _Node:
        for node in parent.children:
            if node.name == child and node.is_high_priority == is_high_priority:
                return node
        new_node = _Node(child, is_high_priority)
        position = next(
            (
                index
                for index, existing in enumerate(parent.children)
                if self._should_precede(parent, new_node, existing)
            ),
            len(parent.children),
        )
        parent.children.insert(position, new_node)
        return new_node

    def _run(self, handler_ids: list[int]) -> bool:
        return any(self._handlers[h & HANDLER_MASK](self) for h in list(handler_ids))

    def _execute(self, parent: _Node, index: int, segments: list[str]) -> bool:
        if index >= len(segments):
            return self._run(parent.handlers)
        segment = segments[index]
        for child in parent.children:
            if child.name.startswith("*"):
                if self._run(child.handlers):
                    return True
            elif child.name.startswith(":") and segment:
                self._params.append(segment)
                if self._execute(child, index + 1, segments):
                    return True
                self._params.pop()
            elif child.name == segment:
                if self._execute(child, index + 1, segments):
                    return True
        return False

    def _find_handler(self, method: str, pattern: str, priority: int) -> Optional[int]:
        for method_node in self._root.children:
            if method_node.name != method:
                continue
            node = method_node
            high = priority == Priority.HIGH
            for segment in _split_url(pattern):
                node = next(
                    (c for c in node.children if c.name == segment and c.is_high_priority == high),
                    None,
                )
                if node is None:
                    return None
            return next(
                (h for h in node.handlers if (h & ~HANDLER_MASK & 0xFFFFFFFF) == priority),
                None,
            )
        return None

    def route(self, method: str, url: str) -> bool:
        """Run matching handlers until one returns True; report whether any did."""
        self._params = []
        segments = _split_url(url)
        for method_node in self._root.children:
            if method_node.name == method:
                return self._execute(method_node, 0, segments)
        return False

    def add(self, methods, pattern: str, handler: Handler, priority: int = Priority.MEDIUM) -> None:
        """Register *handler* for every method in *methods* under *pattern*."""
        methods = list(methods)
        if not methods:
            raise ValueError("at least one method is required")
        priority = int(priority)
        handler_id = priority | len(self._handlers)
        for method in methods:
            node = self._get_node(self._root, method, False)
            for segment in _split_url(pattern):
                node = self._get_node(node, segment, priority == Priority.HIGH)
            bisect.insort_right(node.handlers, handler_id)
        self._handlers.append(handler)
        if self._find_handler(methods[0], pattern, priority) != handler_id:
            raise RuntimeError("internal routing error")

    def _cull(self, parent: Optional[_Node], node: _Node, handler_id: int) -> bool:
        for child in list(node.children):
            self._cull(node, child, handler_id)
        if parent is None:
            return False
        index = handler_id & HANDLER_MASK
        kept: list[int] = []
        for h in node.handlers:
            if (h & HANDLER_MASK) > index:
                kept.append(((h & HANDLER_MASK) - 1) | (h & ~HANDLER_MASK & 0xFFFFFFFF))
            elif h != handler_id:
                kept.append(h)
        node.handlers = kept
        if not node.handlers and not node.children:
            parent.children = [c for c in parent.children if c is not node]
            return True
        return False

    def remove(self, method: str, pattern: str, priority: int) -> None:
        """Remove every route sharing the handler found for these parameters."""
        handler_id = self._find_handler(method, pattern, int(priority))
        if handler_id is None:
            return
        self._cull(None, self._root, handler_id)
        del self._handlers[handler_id & HANDLER_MASK]