"""Per-run context attached to every structured log line."""

from __future__ import annotations

from contextvars import ContextVar
from uuid import uuid4


run_context: ContextVar[dict | None] = ContextVar("run_context", default=None)


def generate_run_id() -> str:
    """Generate a 16-char hex run ID."""
    return uuid4().hex[:16]


def get_run_context() -> dict:
    """Get the current run context, creating a run_id on first use."""
    ctx = run_context.get()
    if ctx is None or not ctx.get("run_id"):
        ctx = {"run_id": generate_run_id()}
        run_context.set(ctx)
    return ctx


def set_run_context(command: str, run_id: str | None = None, **extra: object) -> dict:
    """Start a new run context for ``command`` and return it."""
    ctx = {"run_id": run_id or generate_run_id(), "command": command, **extra}
    run_context.set(ctx)
    return ctx
