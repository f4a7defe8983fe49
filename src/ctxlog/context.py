"""
Request-scoped propagation context.

A ``Context`` is an immutable value tree. Each ``with_value()`` call returns
a new node pointing at its parent, so deriving a child never changes the
parent or any sibling derived from the same ancestor. Lookups walk towards
the root and the nearest binding wins.

The carrier is passed explicitly through call chains. For code that cannot
thread it through (framework hooks, middleware), ``use_context()`` binds a
context to the running thread or asyncio task via ``contextvars``; the
ContextVar only stores a reference to the immutable value.

Usage:
    from ctxlog.context import background, use_context, current_context

    ctx = background().with_value("tenant", "acme")
    with use_context(ctx):
        assert current_context().value("tenant") == "acme"
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

_NO_KEY = object()


@dataclass(frozen=True, eq=False)
class Context:
    """Immutable node in a context tree."""

    parent: Context | None = None
    key: Hashable = _NO_KEY
    val: Any = None

    def with_value(self, key: Hashable, value: Any) -> Context:
        """Return a child context binding ``key`` to ``value``."""
        return Context(parent=self, key=key, val=value)

    def value(self, key: Hashable, default: Any = None) -> Any:
        """Return the nearest value bound to ``key``, or ``default``."""
        node: Context | None = self
        while node is not None:
            if node.key is not _NO_KEY and node.key == key:
                return node.val
            node = node.parent
        return default

    def __repr__(self) -> str:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return f"Context(depth={depth})"


_BACKGROUND = Context()

# Context bound to the running thread/task by use_context()
_current: ContextVar[Context] = ContextVar("ctxlog_context")  # noqa: B039


def background() -> Context:
    """Return the shared empty root context."""
    return _BACKGROUND


def current_context() -> Context:
    """Return the context bound by the innermost ``use_context()`` block."""
    return _current.get(_BACKGROUND)


@contextmanager
def use_context(ctx: Context) -> Iterator[Context]:
    """
    Bind ``ctx`` as the current context for the duration of a block.

    The previous binding is restored on exit, including when the block
    raises.
    """
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)


__all__ = [
    "Context",
    "background",
    "current_context",
    "use_context",
]
