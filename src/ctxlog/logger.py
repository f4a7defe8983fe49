"""
Logger facade: explicit handles and context-aware free functions.

Two calling conventions produce identical records:

    # Ambient context: fields travel with the request-scoped context
    ctx = ctxlog.attach_fields(ctx, {"k1": "v1"})
    ctxlog.info_ctx(ctx, "info")

    # Explicit handle: fields accumulate on immutable logger handles
    ctxlog.with_fields({"k2": "v2"}).info_ctx(ctx, "info")

Every severity (debug, info, warn, error, fatal) has four forms:

    info(*args)                  plain, space-joined message
    infof(fmt, *args)            printf-style message (fmt % args)
    info_ctx(ctx, *args)         plain, with the context's fields
    infof_ctx(ctx, fmt, *args)   printf-style, with the context's fields

Module-level functions delegate to a root ``Entry`` with no fields, so
both conventions share one merge-then-emit path. When a handle emits with
a context, the context's fields are the base and the handle's fields win.

A fatal record terminates the process once it is written.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from ctxlog import backend
from ctxlog.backend import Level
from ctxlog.config import ensure_configured
from ctxlog.context import Context, current_context
from ctxlog.fields import ERROR_KEY, Fields, freeze
from ctxlog.propagation import read_fields


def _sprint(args: tuple[Any, ...]) -> str:
    return " ".join(str(arg) for arg in args)


def _sprintf(format: str, args: tuple[Any, ...]) -> str:
    if not args:
        return format
    try:
        return format % args
    except (TypeError, ValueError):
        # Mismatched verbs: keep the template and the raw arguments
        return " ".join([format, *(repr(arg) for arg in args)])


@runtime_checkable
class Logger(Protocol):
    """Capability set shared by everything that can log with fields."""

    def with_field(self, key: str, value: Any) -> Logger: ...
    def with_fields(self, fields: Fields) -> Logger: ...
    def with_error(self, err: BaseException | str) -> Logger: ...

    def debug(self, *args: Any) -> None: ...
    def info(self, *args: Any) -> None: ...
    def warn(self, *args: Any) -> None: ...
    def error(self, *args: Any) -> None: ...
    def fatal(self, *args: Any) -> None: ...

    def debugf(self, format: str, *args: Any) -> None: ...
    def infof(self, format: str, *args: Any) -> None: ...
    def warnf(self, format: str, *args: Any) -> None: ...
    def errorf(self, format: str, *args: Any) -> None: ...
    def fatalf(self, format: str, *args: Any) -> None: ...

    def debug_ctx(self, ctx: Context, *args: Any) -> None: ...
    def info_ctx(self, ctx: Context, *args: Any) -> None: ...
    def warn_ctx(self, ctx: Context, *args: Any) -> None: ...
    def error_ctx(self, ctx: Context, *args: Any) -> None: ...
    def fatal_ctx(self, ctx: Context, *args: Any) -> None: ...

    def debugf_ctx(self, ctx: Context, format: str, *args: Any) -> None: ...
    def infof_ctx(self, ctx: Context, format: str, *args: Any) -> None: ...
    def warnf_ctx(self, ctx: Context, format: str, *args: Any) -> None: ...
    def errorf_ctx(self, ctx: Context, format: str, *args: Any) -> None: ...
    def fatalf_ctx(self, ctx: Context, format: str, *args: Any) -> None: ...


class Entry:
    """
    Immutable logger handle wrapping a structlog bound logger.

    ``with_*`` methods return new handles; the receiver keeps its own
    fields. Handles are safe to share between threads and tasks.
    """

    __slots__ = ("_logger",)

    def __init__(self, logger: Any = None):
        if logger is None:
            ensure_configured()
            logger = backend.new_logger()
        self._logger = logger

    @property
    def fields(self) -> Mapping[str, Any]:
        """Read-only snapshot of the fields attached to this handle."""
        return freeze(backend.bound_fields(self._logger))

    def __repr__(self) -> str:
        return f"Entry(fields={dict(self.fields)!r})"

    # -- attachment ---------------------------------------------------------

    def with_field(self, key: str, value: Any) -> Entry:
        return Entry(backend.bind(self._logger, {key: value}))

    def with_fields(self, fields: Fields) -> Entry:
        return Entry(backend.bind(self._logger, fields))

    def with_error(self, err: BaseException | str) -> Entry:
        """Attach ``err``'s string form under the reserved ``error`` key."""
        return self.with_field(ERROR_KEY, str(err))

    # -- emission -----------------------------------------------------------

    def _log(self, level: Level, message: str, ctx: Context | None = None) -> None:
        base = read_fields(ctx) if ctx is not None else None
        backend.emit(level, message, fields=base, logger=self._logger)

    def debug(self, *args: Any) -> None:
        self._log(Level.DEBUG, _sprint(args))

    def info(self, *args: Any) -> None:
        self._log(Level.INFO, _sprint(args))

    def warn(self, *args: Any) -> None:
        self._log(Level.WARN, _sprint(args))

    def error(self, *args: Any) -> None:
        self._log(Level.ERROR, _sprint(args))

    def fatal(self, *args: Any) -> None:
        self._log(Level.FATAL, _sprint(args))

    def debugf(self, format: str, *args: Any) -> None:
        self._log(Level.DEBUG, _sprintf(format, args))

    def infof(self, format: str, *args: Any) -> None:
        self._log(Level.INFO, _sprintf(format, args))

    def warnf(self, format: str, *args: Any) -> None:
        self._log(Level.WARN, _sprintf(format, args))

    def errorf(self, format: str, *args: Any) -> None:
        self._log(Level.ERROR, _sprintf(format, args))

    def fatalf(self, format: str, *args: Any) -> None:
        self._log(Level.FATAL, _sprintf(format, args))

    def debug_ctx(self, ctx: Context, *args: Any) -> None:
        self._log(Level.DEBUG, _sprint(args), ctx)

    def info_ctx(self, ctx: Context, *args: Any) -> None:
        self._log(Level.INFO, _sprint(args), ctx)

    def warn_ctx(self, ctx: Context, *args: Any) -> None:
        self._log(Level.WARN, _sprint(args), ctx)

    def error_ctx(self, ctx: Context, *args: Any) -> None:
        self._log(Level.ERROR, _sprint(args), ctx)

    def fatal_ctx(self, ctx: Context, *args: Any) -> None:
        self._log(Level.FATAL, _sprint(args), ctx)

    def debugf_ctx(self, ctx: Context, format: str, *args: Any) -> None:
        self._log(Level.DEBUG, _sprintf(format, args), ctx)

    def infof_ctx(self, ctx: Context, format: str, *args: Any) -> None:
        self._log(Level.INFO, _sprintf(format, args), ctx)

    def warnf_ctx(self, ctx: Context, format: str, *args: Any) -> None:
        self._log(Level.WARN, _sprintf(format, args), ctx)

    def errorf_ctx(self, ctx: Context, format: str, *args: Any) -> None:
        self._log(Level.ERROR, _sprintf(format, args), ctx)

    def fatalf_ctx(self, ctx: Context, format: str, *args: Any) -> None:
        self._log(Level.FATAL, _sprintf(format, args), ctx)

    # Aliases matching the stdlib/structlog spelling
    warning = warn
    warningf = warnf
    warning_ctx = warn_ctx
    warningf_ctx = warnf_ctx


# =============================================================================
# Handle constructors
# =============================================================================


def with_field(key: str, value: Any) -> Entry:
    return Entry().with_field(key, value)


def with_fields(fields: Fields) -> Entry:
    return Entry().with_fields(fields)


def with_error(err: BaseException | str) -> Entry:
    return Entry().with_error(err)


def from_ctx(ctx: Context | None = None) -> Entry:
    """
    Return a handle carrying the fields attached to ``ctx``.

    Falls back to the context bound by ``use_context()`` when ``ctx`` is
    omitted.
    """
    if ctx is None:
        ctx = current_context()
    return Entry().with_fields(read_fields(ctx))


# =============================================================================
# Free functions (no fields)
# =============================================================================


def debug(*args: Any) -> None:
    Entry().debug(*args)


def info(*args: Any) -> None:
    Entry().info(*args)


def warn(*args: Any) -> None:
    Entry().warn(*args)


def error(*args: Any) -> None:
    Entry().error(*args)


def fatal(*args: Any) -> None:
    Entry().fatal(*args)


def debugf(format: str, *args: Any) -> None:
    Entry().debugf(format, *args)


def infof(format: str, *args: Any) -> None:
    Entry().infof(format, *args)


def warnf(format: str, *args: Any) -> None:
    Entry().warnf(format, *args)


def errorf(format: str, *args: Any) -> None:
    Entry().errorf(format, *args)


def fatalf(format: str, *args: Any) -> None:
    Entry().fatalf(format, *args)


# =============================================================================
# Context-aware free functions
# =============================================================================


def debug_ctx(ctx: Context, *args: Any) -> None:
    Entry().debug_ctx(ctx, *args)


def info_ctx(ctx: Context, *args: Any) -> None:
    Entry().info_ctx(ctx, *args)


def warn_ctx(ctx: Context, *args: Any) -> None:
    Entry().warn_ctx(ctx, *args)


def error_ctx(ctx: Context, *args: Any) -> None:
    Entry().error_ctx(ctx, *args)


def fatal_ctx(ctx: Context, *args: Any) -> None:
    Entry().fatal_ctx(ctx, *args)


def debugf_ctx(ctx: Context, format: str, *args: Any) -> None:
    Entry().debugf_ctx(ctx, format, *args)


def infof_ctx(ctx: Context, format: str, *args: Any) -> None:
    Entry().infof_ctx(ctx, format, *args)


def warnf_ctx(ctx: Context, format: str, *args: Any) -> None:
    Entry().warnf_ctx(ctx, format, *args)


def errorf_ctx(ctx: Context, format: str, *args: Any) -> None:
    Entry().errorf_ctx(ctx, format, *args)


def fatalf_ctx(ctx: Context, format: str, *args: Any) -> None:
    Entry().fatalf_ctx(ctx, format, *args)


warning = warn
warningf = warnf
warning_ctx = warn_ctx
warningf_ctx = warnf_ctx


__all__ = [
    "Entry",
    "Logger",
    "debug",
    "debug_ctx",
    "debugf",
    "debugf_ctx",
    "error",
    "error_ctx",
    "errorf",
    "errorf_ctx",
    "fatal",
    "fatal_ctx",
    "fatalf",
    "fatalf_ctx",
    "from_ctx",
    "info",
    "info_ctx",
    "infof",
    "infof_ctx",
    "warn",
    "warn_ctx",
    "warnf",
    "warnf_ctx",
    "warning",
    "warning_ctx",
    "warningf",
    "warningf_ctx",
    "with_error",
    "with_field",
    "with_fields",
]
