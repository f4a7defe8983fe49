"""
Structured error types for ctxlog.

Field attachment and emission never fail in normal operation, so the
hierarchy is small: it only covers mistakes made while configuring the
backend (unknown level names, unknown output formats).

Usage:
    from ctxlog.errors import ConfigError

    try:
        configure_logging(level="loud")
    except ConfigError as e:
        print(e.to_dict())
"""

from __future__ import annotations

from typing import Any


class CtxLogError(Exception):
    """Base class for all ctxlog errors."""

    def __init__(self, message: str, *, setting: str | None = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.setting = setting
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging and reporting."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
        }
        if self.setting is not None:
            result["setting"] = self.setting
            result["value"] = self.value
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ConfigError(CtxLogError, ValueError):
    """Invalid logging configuration (unknown level, format or output)."""


__all__ = [
    "CtxLogError",
    "ConfigError",
]
