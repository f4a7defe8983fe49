"""
ctxlog - Context-scoped structured logging.

This package provides:
- Structured fields carried on an immutable, request-scoped context
- Immutable logger handles that accumulate fields (with_field / with_fields / with_error)
- Context-aware logging functions at five levels (debug, info, warn, error, fatal)
- structlog rendering (logfmt, json, console) with environment-based configuration

Usage:
    import ctxlog

    # Configure once at startup
    ctxlog.configure_logging()

    # Attach fields to the context instead of passing loggers around
    ctx = ctxlog.attach_field(ctxlog.background(), "request_id", "r-1")
    ctxlog.info_ctx(ctx, "request started")
    # level=info msg="request started" request_id=r-1

    # Or accumulate fields on a handle
    ctxlog.with_field("user", "alice").warnf_ctx(ctx, "retry %d", 2)
    # level=warning msg="retry 2" request_id=r-1 user=alice
"""

from ctxlog.backend import Level, register_exit_handler
from ctxlog.config import (
    configure_logging,
    ensure_configured,
    is_configured,
    is_enabled_for,
    reset_logging,
)
from ctxlog.context import Context, background, current_context, use_context
from ctxlog.errors import ConfigError, CtxLogError
from ctxlog.fields import EMPTY_FIELDS, ERROR_KEY, Fields, merge
from ctxlog.logger import (
    Entry,
    Logger,
    debug,
    debug_ctx,
    debugf,
    debugf_ctx,
    error,
    error_ctx,
    errorf,
    errorf_ctx,
    fatal,
    fatal_ctx,
    fatalf,
    fatalf_ctx,
    from_ctx,
    info,
    info_ctx,
    infof,
    infof_ctx,
    warn,
    warn_ctx,
    warnf,
    warnf_ctx,
    warning,
    warning_ctx,
    warningf,
    warningf_ctx,
    with_error,
    with_field,
    with_fields,
)
from ctxlog.propagation import attach_field, attach_fields, read_fields

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "configure_logging",
    "ensure_configured",
    "is_configured",
    "is_enabled_for",
    "reset_logging",
    "register_exit_handler",
    "Level",
    # Errors
    "CtxLogError",
    "ConfigError",
    # Fields and context
    "Fields",
    "EMPTY_FIELDS",
    "ERROR_KEY",
    "merge",
    "Context",
    "background",
    "current_context",
    "use_context",
    "attach_field",
    "attach_fields",
    "read_fields",
    # Handles
    "Entry",
    "Logger",
    "with_field",
    "with_fields",
    "with_error",
    "from_ctx",
    # Free functions
    "debug",
    "info",
    "warn",
    "warning",
    "error",
    "fatal",
    "debugf",
    "infof",
    "warnf",
    "warningf",
    "errorf",
    "fatalf",
    # Context-aware functions
    "debug_ctx",
    "info_ctx",
    "warn_ctx",
    "warning_ctx",
    "error_ctx",
    "fatal_ctx",
    "debugf_ctx",
    "infof_ctx",
    "warnf_ctx",
    "warningf_ctx",
    "errorf_ctx",
    "fatalf_ctx",
]
