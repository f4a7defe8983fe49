"""
Field store: structured key/value mappings attached to log records.

A field mapping is never mutated once it is attached to a context or a
logger handle. Every merge builds a fresh dict, and stored mappings are
handed out as read-only ``MappingProxyType`` views so readers cannot write
through them.

Usage:
    from ctxlog.fields import merge

    merged = merge({"k1": "v1"}, {"k1": "v2", "k2": "v3"})
    # {"k1": "v2", "k2": "v3"}
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

# Drop-in name for a field set; plain dicts are accepted everywhere.
Fields = Mapping[str, Any]

# Reserved key used by every with_error() path.
ERROR_KEY = "error"

EMPTY_FIELDS: Mapping[str, Any] = MappingProxyType({})


def merge(base: Fields | None, overlay: Fields | None) -> dict[str, Any]:
    """
    Merge two field mappings into a new dict.

    Keys in ``overlay`` win on collision. Neither input is modified and the
    result shares no storage with them.

    Args:
        base: Mapping applied first (may be None or empty)
        overlay: Mapping applied on top (may be None or empty)

    Returns:
        A new dict owned by the caller
    """
    merged: dict[str, Any] = dict(base) if base else {}
    if overlay:
        merged.update(overlay)
    return merged


def freeze(fields: Fields | None) -> Mapping[str, Any]:
    """Return a read-only snapshot of ``fields``."""
    if not fields:
        return EMPTY_FIELDS
    return MappingProxyType(dict(fields))


__all__ = [
    "EMPTY_FIELDS",
    "ERROR_KEY",
    "Fields",
    "freeze",
    "merge",
]
