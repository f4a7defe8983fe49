"""
Read and write log fields on a propagation context.

Fields live under a single module-private key, so they are invisible to
other users of the same ``Context`` type. Every write copies the current
mapping before applying new values; a context obtained earlier (or a
sibling derived from the same parent) never sees fields attached later.

Usage:
    from ctxlog.context import background
    from ctxlog.propagation import attach_field, attach_fields, read_fields

    ctx = attach_field(background(), "request_id", "r-1")
    ctx = attach_fields(ctx, {"user": "alice"})
    read_fields(ctx)  # {"request_id": "r-1", "user": "alice"}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ctxlog.context import Context
from ctxlog.fields import EMPTY_FIELDS, Fields, freeze, merge


class _FieldsKey:
    """Private context key type; instances only compare equal to themselves."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<ctxlog fields>"


_FIELDS_KEY = _FieldsKey()


def read_fields(ctx: Context) -> Mapping[str, Any]:
    """
    Return the field mapping attached to ``ctx``.

    Returns an empty mapping when nothing was ever attached. A value under
    the private key that is not a mapping is treated the same way.
    """
    fields = ctx.value(_FIELDS_KEY)
    if not isinstance(fields, Mapping):
        return EMPTY_FIELDS
    return fields


def attach_field(ctx: Context, key: str, value: Any) -> Context:
    """Return a new context whose fields include ``key=value``."""
    return attach_fields(ctx, {key: value})


def attach_fields(ctx: Context, fields: Fields) -> Context:
    """Return a new context whose fields are ``ctx``'s fields overlaid with ``fields``."""
    return ctx.with_value(_FIELDS_KEY, freeze(merge(read_fields(ctx), fields)))


__all__ = [
    "attach_field",
    "attach_fields",
    "read_fields",
]
