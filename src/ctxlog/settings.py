"""Environment-driven logging settings.

Every setting can be overridden with a ``CTXLOG_`` environment variable or
a ``.env`` file in the working directory. Explicit arguments passed to
``configure_logging()`` always take precedence.

Fields
──────
level       : Minimum severity rendered (debug, info, warn, error, fatal)
format      : Renderer (logfmt, json, console)
timestamps  : Prefix each record with an ISO-8601 UTC timestamp
output      : Sink stream (stderr, stdout)

Examples:
    >>> import os
    >>> os.environ["CTXLOG_LEVEL"] = "debug"
    >>> LogSettings().level
    'debug'
"""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ctxlog.backend import Level


class LogSettings(BaseSettings):
    """Logging settings read from ``CTXLOG_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CTXLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "info"
    format: Literal["logfmt", "json", "console"] = "logfmt"
    timestamps: bool = False
    output: Literal["stderr", "stdout"] = "stderr"

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return Level.parse(value).value

    @field_validator("format", "output", mode="before")
    @classmethod
    def _lowercase(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value
