#!/usr/bin/env python3
"""Request-scoped fields: log with context instead of passing loggers around.

WHY CONTEXT-SCOPED FIELDS
─────────────────────────
Request handlers usually want every log line to carry the same handful of
fields (request_id, user, tenant). Passing a logger through every function
only for that is noisy. ctxlog stores the fields on an immutable context
value that the call chain already carries, and merges them into each
record at emission time.

ARCHITECTURE
────────────
    handle_request(ctx)                  ctxlog
    ───────────────────                  ──────
    ctx = attach_field(ctx, ...)   ──▶   new Context, parent untouched
      load_user(ctx)               ──▶   info_ctx(ctx, ...)
        ctx = attach_field(...)            read_fields(ctx) → backend
      with_field(...).warn_ctx()   ──▶   context fields + handle fields
                                           (handle wins on conflict)

Run: python examples/request_scope.py
"""

import ctxlog


def load_user(ctx: ctxlog.Context, user: str) -> None:
    ctx = ctxlog.attach_field(ctx, "user", user)
    ctxlog.debugf_ctx(ctx, "loading %s", user)
    ctxlog.with_field("cache", "miss").warn_ctx(ctx, "slow lookup")


def handle_request(ctx: ctxlog.Context, request_id: str) -> None:
    ctx = ctxlog.attach_field(ctx, "request_id", request_id)
    ctxlog.info_ctx(ctx, "request started")
    load_user(ctx, "alice")
    ctxlog.info_ctx(ctx, "request finished")


def main():
    print("=" * 60)
    print("Request-scoped logging")
    print("=" * 60)

    # ── 1. Configure logging ────────────────────────────────────
    print("\n--- 1. Configure logging ---")
    ctxlog.configure_logging(level="debug", output="stdout")
    ctxlog.info("logging configured")

    # ── 2. Fields on the context ────────────────────────────────
    print("\n--- 2. Context fields ---")
    root = ctxlog.attach_fields(ctxlog.background(), {"service": "api"})
    handle_request(root, "r-1")

    # ── 3. Sibling contexts stay isolated ───────────────────────
    print("\n--- 3. Sibling isolation ---")
    left = ctxlog.attach_field(root, "branch", "left")
    right = ctxlog.attach_field(root, "branch", "right")
    ctxlog.info_ctx(left, "left branch")
    ctxlog.info_ctx(right, "right branch")
    ctxlog.info_ctx(root, "root untouched")

    # ── 4. Errors ───────────────────────────────────────────────
    print("\n--- 4. Errors ---")
    try:
        int("not a number")
    except ValueError as e:
        ctxlog.with_error(e).error_ctx(root, "parse failed")

    print("\n" + "=" * 60)
    print("[OK] Request-scoped logging example complete")


if __name__ == "__main__":
    main()
