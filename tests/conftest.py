"""
Shared pytest fixtures and configuration for ctxlog tests.

This module provides:
- Logging reset fixtures for test isolation
- An in-memory sink wired into the structlog backend
- A fake exit function so fatal records never stop the test run

Usage:
    Fixtures are auto-discovered by pytest.

    def test_something(sink):
        ctxlog.info("hello")
        assert sink.lines() == ["level=info msg=hello"]
"""

import io
import os
import sys
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

SRC_DIR = Path(__file__).parent.parent / "src"

# Ensure ctxlog package is importable
sys.path.insert(0, str(SRC_DIR))

from ctxlog.config import configure_logging, reset_logging  # noqa: E402

ENV_VARS = ("CTXLOG_LEVEL", "CTXLOG_FORMAT", "CTXLOG_TIMESTAMPS", "CTXLOG_OUTPUT")


class Sink(io.StringIO):
    """StringIO that also records exit calls made after fatal records."""

    def __init__(self) -> None:
        super().__init__()
        self.exit = MagicMock(name="exit_func")

    def lines(self) -> list[str]:
        return self.getvalue().splitlines()


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Start every test unconfigured, without CTXLOG_* env vars or a stray .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_logging()
    yield
    reset_logging()


# =============================================================================
# Sink Fixtures
# =============================================================================


@pytest.fixture
def sink() -> Sink:
    """Configure logfmt output at DEBUG into an in-memory sink."""
    buf = Sink()
    configure_logging(level="debug", format="logfmt", output=buf, exit_func=buf.exit, force=True)
    return buf


@pytest.fixture
def subprocess_env() -> dict[str, str]:
    """Environment for child interpreters that must import ctxlog from src/."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = str(SRC_DIR) if not existing else os.pathsep.join([str(SRC_DIR), existing])
    return env
