"""
Fatal termination across a process boundary.

Each test runs a small script in a child interpreter and checks that the
fatal record was written, the process exited with status 1, and no caller
code ran afterwards (not even ``finally`` blocks or ``except SystemExit``).
"""

from __future__ import annotations

import subprocess
import sys
import textwrap

import pytest

PRELUDE = """
import ctxlog
ctxlog.configure_logging(output="stdout")
ctx = ctxlog.attach_field(ctxlog.background(), "k1", "v1")
"""


def run_script(body: str, env: dict[str, str], cwd) -> subprocess.CompletedProcess:
    script = PRELUDE + textwrap.dedent(body)
    return subprocess.run(
        [sys.executable, "-c", script],
        capture_output=True,
        text=True,
        env=env,
        cwd=cwd,
        timeout=60,
    )


@pytest.mark.parametrize(
    "call, expected",
    [
        ('ctxlog.fatal("boom")', "level=fatal msg=boom"),
        ('ctxlog.fatalf("boom %d", 7)', 'level=fatal msg="boom 7"'),
        ('ctxlog.fatal_ctx(ctx, "boom")', "level=fatal msg=boom k1=v1"),
        ('ctxlog.fatalf_ctx(ctx, "boom%s", "!")', "level=fatal msg=boom! k1=v1"),
        ('ctxlog.with_field("k2", "v2").fatal("boom")', "level=fatal msg=boom k2=v2"),
        ('ctxlog.with_error(ValueError("bad")).fatalf("boom")', "level=fatal msg=boom error=bad"),
        ('ctxlog.with_field("k2", "v2").fatal_ctx(ctx, "boom")', "level=fatal msg=boom k1=v1 k2=v2"),
        ('ctxlog.with_field("k1", "h").fatalf_ctx(ctx, "boom")', "level=fatal msg=boom k1=h"),
    ],
)
def test_every_fatal_path_terminates(call, expected, subprocess_env, tmp_path):
    result = run_script(
        f"""
        try:
            {call}
        except SystemExit:
            print("caught SystemExit")
        finally:
            print("finally ran")
        print("after fatal")
        """,
        subprocess_env,
        tmp_path,
    )

    assert result.returncode == 1
    assert result.stdout.splitlines() == [expected]


def test_exit_handlers_run_before_termination(subprocess_env, tmp_path):
    result = run_script(
        """
        ctxlog.register_exit_handler(lambda: print("flushing buffers"))
        ctxlog.fatal_ctx(ctx, "boom")
        print("after fatal")
        """,
        subprocess_env,
        tmp_path,
    )

    assert result.returncode == 1
    assert result.stdout.splitlines() == ["level=fatal msg=boom k1=v1", "flushing buffers"]


def test_records_before_fatal_are_kept(subprocess_env, tmp_path):
    result = run_script(
        """
        ctxlog.error("visible")
        ctxlog.fatal("boom")
        print("after fatal")
        """,
        subprocess_env,
        tmp_path,
    )

    assert result.returncode == 1
    assert result.stdout.splitlines() == ["level=error msg=visible", "level=fatal msg=boom"]
