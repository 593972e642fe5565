"""Run execution domain exports."""

from .rewrite_run_use_case import (
    RunExecutionError,
    build_rewrite_request,
    execute_schema_rewrite_run,
)
from .run_contracts import RewriteOutcome, RewriteRequest

__all__ = [
    "RewriteRequest",
    "RewriteOutcome",
    "RunExecutionError",
    "build_rewrite_request",
    "execute_schema_rewrite_run",
]
