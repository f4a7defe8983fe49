"""
Logging configuration.

Provides a single entry point for configuring the structlog backend.
Supports environment-based configuration for:
- Log level (DEBUG, INFO, WARN, ERROR, FATAL)
- Output format (logfmt, json, console)
- Timestamps on/off
- Output stream (stderr, stdout)

Configuration is read from environment variables (see ``ctxlog.settings``):
- CTXLOG_LEVEL: debug | info | warn | error | fatal (default: info)
- CTXLOG_FORMAT: logfmt | json | console (default: logfmt)
- CTXLOG_TIMESTAMPS: true | false (default: false)
- CTXLOG_OUTPUT: stderr | stdout (default: stderr)

Usage:
    # Configure at application startup
    from ctxlog import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="debug", format="json", output=sys.stdout)

The facade calls ``ensure_configured()`` before emitting, so applications
that never configure logging get the environment defaults.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any, TextIO

import structlog

from ctxlog.backend import (
    Level,
    build_processors,
    clear_exit_handlers,
    set_exit_func,
)
from ctxlog.errors import ConfigError
from ctxlog.settings import LogSettings

# Track if logging has been configured
_configured = False
_level = Level.INFO


def configure_logging(
    level: str | Level | None = None,
    format: str | None = None,
    output: str | TextIO | None = None,
    timestamps: bool | None = None,
    exit_func: Callable[[int], Any] | None = None,
    force: bool = False,
) -> None:
    """
    Configure the structlog backend.

    Should be called once at application startup. Subsequent calls are
    no-ops unless force=True.

    Args:
        level: Minimum level rendered (overrides CTXLOG_LEVEL)
        format: Output format (overrides CTXLOG_FORMAT)
        output: "stderr", "stdout" or any writable text stream (overrides CTXLOG_OUTPUT)
        timestamps: Include an ISO timestamp (overrides CTXLOG_TIMESTAMPS)
        exit_func: Called with exit code 1 after a fatal record (default: os._exit)
        force: Reconfigure even if already configured

    Raises:
        ConfigError: Unknown level, format or output name
    """
    global _configured, _level

    if _configured and not force:
        return

    settings = LogSettings()

    log_level = Level.parse(level if level is not None else settings.level)
    log_format = (format or settings.format).lower()
    sink = _resolve_output(output if output is not None else settings.output)
    with_timestamps = settings.timestamps if timestamps is None else timestamps

    processors = build_processors(
        log_format,
        timestamps=with_timestamps,
        colors=_isatty(sink),
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level.number),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sink),
        cache_logger_on_first_use=False,
    )
    set_exit_func(exit_func)

    _level = log_level
    _configured = True


def _resolve_output(output: str | TextIO) -> TextIO:
    if not isinstance(output, str):
        return output
    name = output.strip().lower()
    if name == "stderr":
        return sys.stderr
    if name == "stdout":
        return sys.stdout
    raise ConfigError(f"Unknown log output: {output!r}", setting="output", value=output)


def _isatty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def ensure_configured() -> None:
    """Configure from the environment unless configure_logging() already ran."""
    if not _configured:
        configure_logging()


def reset_logging() -> None:
    """Restore structlog defaults and forget the current configuration."""
    global _configured, _level

    structlog.reset_defaults()
    set_exit_func(None)
    clear_exit_handlers()
    _level = Level.INFO
    _configured = False


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def is_enabled_for(level: str | Level) -> bool:
    """Check if records at ``level`` are rendered."""
    return Level.parse(level).number >= _level.number


__all__ = [
    "configure_logging",
    "ensure_configured",
    "is_configured",
    "is_enabled_for",
    "reset_logging",
]
