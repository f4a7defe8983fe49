"""
structlog backend: severity levels, processor chain, emission and fatal exit.

Everything about rendering lives here. The facade in ``ctxlog.logger``
hands over a structlog bound logger, a severity and an already rendered
message; this module resolves the final field set, renders one record and,
for ``Level.FATAL``, terminates the process afterwards.

Reference rendering (``logfmt`` format, timestamps off):

    level=info msg=info k1=v1 k2=v2
    level=warning msg=warn1 k1=v1 k3=v3
    level=error msg=msg error=err

Fatal exit sequence:
    1. record is emitted (PrintLogger flushes the sink on every line)
    2. handlers added with register_exit_handler() run in order
    3. stdout/stderr are flushed
    4. the exit function runs (default: os._exit(1))
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from ctxlog.errors import ConfigError
from ctxlog.fields import merge

LOGGER_NAME = "ctxlog"

FORMATS = ("logfmt", "json", "console")

# Keys rendered first, in this order, by the logfmt renderer
KEY_ORDER = ["timestamp", "level", "msg"]

# Keys written by the processor chain; user fields with these names are
# kept under FIELD_PREFIX instead of being overwritten.
RESERVED_KEYS = frozenset({"event", "msg", "level", "timestamp"})
FIELD_PREFIX = "fields."


class Level(str, Enum):
    """Severities supported by the facade, in increasing urgency."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warning"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def number(self) -> int:
        """Matching stdlib logging level number."""
        return _NUMBERS[self]

    @property
    def method(self) -> str:
        """structlog bound logger method used for emission."""
        return "critical" if self is Level.FATAL else self.value

    @classmethod
    def parse(cls, name: str | Level) -> Level:
        """Resolve a level from its name (case-insensitive, ``warn`` accepted)."""
        if isinstance(name, Level):
            return name
        key = str(name).strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ConfigError(f"Unknown log level: {name!r}", setting="level", value=name)


_NUMBERS = {
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.FATAL: logging.CRITICAL,
}

_ALIASES = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "error": Level.ERROR,
    "fatal": Level.FATAL,
    "critical": Level.FATAL,
}


# =============================================================================
# Processors
# =============================================================================


def relabel_fatal(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Render structlog's ``critical`` level as ``fatal``."""
    if event_dict.get("level") == "critical":
        event_dict["level"] = Level.FATAL.value
    return event_dict


def render_bools(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Render booleans as ``true``/``false`` independent of the renderer version."""
    for key, value in event_dict.items():
        if isinstance(value, bool):
            event_dict[key] = "true" if value else "false"
    return event_dict


def build_processors(
    format: str = "logfmt",
    timestamps: bool = False,
    colors: bool = False,
) -> list[Processor]:
    """
    Build the structlog processor chain for one output format.

    Args:
        format: logfmt | json | console
        timestamps: Prefix records with an ISO-8601 UTC timestamp
        colors: Colorize console output

    Raises:
        ConfigError: Unknown format
    """
    if format not in FORMATS:
        raise ConfigError(f"Unknown log format: {format!r}", setting="format", value=format)

    processors: list[Processor] = [
        structlog.processors.add_log_level,
        relabel_fatal,
    ]
    if timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if format == "logfmt":
        processors.append(structlog.processors.EventRenamer("msg"))
        processors.append(render_bools)
        processors.append(
            structlog.processors.LogfmtRenderer(
                key_order=KEY_ORDER,
                drop_missing=True,
                sort_keys=True,
                bool_as_flag=False,
            )
        )
    elif format == "json":
        processors.append(structlog.processors.EventRenamer("msg"))
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


# =============================================================================
# Emission
# =============================================================================


def new_logger() -> Any:
    """Return a fresh structlog logger with no bound fields."""
    return structlog.get_logger(LOGGER_NAME).bind()


def bind(logger: Any, fields: Mapping[str, Any]) -> Any:
    """Attach ``fields`` through structlog's own copy-on-bind primitive."""
    return logger.bind(**fields)


def bound_fields(logger: Any) -> Mapping[str, Any]:
    """Return the fields bound on a structlog logger."""
    return structlog.get_context(logger)


def escape_reserved(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Move keys the processor chain writes itself to ``fields.<key>``."""
    return {
        (FIELD_PREFIX + key if key in RESERVED_KEYS else key): value
        for key, value in fields.items()
    }


def emit(
    level: Level,
    message: str,
    fields: Mapping[str, Any] | None = None,
    logger: Any = None,
) -> None:
    """
    Render and write one record.

    Args:
        level: Severity of the record
        message: Fully rendered message
        fields: Base fields; fields already bound on ``logger`` win on collision.
            Keys in RESERVED_KEYS are rendered as ``fields.<key>``
        logger: structlog bound logger to emit through (fresh one if omitted)
    """
    log = logger if logger is not None else new_logger()
    bound = bound_fields(log)
    clashes = [key for key in bound if key in RESERVED_KEYS]
    if fields or clashes:
        combined = merge(fields, bound)
        if clashes:
            log = log.unbind(*clashes)
        log = bind(log, escape_reserved(combined))
    getattr(log, level.method)(message)
    if level is Level.FATAL:
        fatal_exit()


# =============================================================================
# Fatal exit
# =============================================================================


def _default_exit(code: int) -> None:
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()
    os._exit(code)


_exit_func: Callable[[int], Any] = _default_exit
_exit_handlers: list[Callable[[], Any]] = []


def set_exit_func(func: Callable[[int], Any] | None) -> None:
    """Replace the function called after a fatal record (None restores os._exit)."""
    global _exit_func
    _exit_func = func if func is not None else _default_exit


def register_exit_handler(handler: Callable[[], Any]) -> None:
    """Run ``handler`` after a fatal record is emitted, before the process exits."""
    _exit_handlers.append(handler)


def clear_exit_handlers() -> None:
    """Forget all registered exit handlers."""
    _exit_handlers.clear()


def run_exit_handlers() -> None:
    """Run registered exit handlers; a failing handler is reported and skipped."""
    for handler in list(_exit_handlers):
        try:
            handler()
        except Exception:
            print("ctxlog: exit handler failed", file=sys.stderr)
            traceback.print_exc(file=sys.stderr)


def fatal_exit(code: int = 1) -> None:
    """Run exit handlers, then terminate through the configured exit function."""
    run_exit_handlers()
    _exit_func(code)


__all__ = [
    "FORMATS",
    "FIELD_PREFIX",
    "LOGGER_NAME",
    "Level",
    "RESERVED_KEYS",
    "bind",
    "bound_fields",
    "build_processors",
    "clear_exit_handlers",
    "emit",
    "escape_reserved",
    "fatal_exit",
    "new_logger",
    "register_exit_handler",
    "relabel_fatal",
    "render_bools",
    "run_exit_handlers",
    "set_exit_func",
]
