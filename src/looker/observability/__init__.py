"""Logging and run-context helpers shared by the CLI commands."""

from looker.observability.context import get_run_context, run_context, set_run_context
from looker.observability.logging import JsonFormatter, configure_logging


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_run_context",
    "run_context",
    "set_run_context",
]
