"""
Tracing Context - request-scoped context for log correlation.

Uses Python's contextvars so concurrent requests served by the same event
loop never see each other's values.

Usage:
    TracingContext.set(correlation_id="abc-123", owner="octo", repo="hello")
    ctx = TracingContext.get()  # picked up by JSONFormatter
    prefix = TracingContext.get_log_prefix()  # "[corr=abc-123 repo=octo/hello]"
    TracingContext.clear()
"""

import uuid
from contextvars import ContextVar
from typing import Dict

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_owner: ContextVar[str] = ContextVar("owner", default="")
_repo: ContextVar[str] = ContextVar("repo", default="")
_operation: ContextVar[str] = ContextVar("operation", default="")


class TracingContext:
    """Request-scoped tracing fields."""

    @staticmethod
    def set(
        correlation_id: str = "",
        owner: str = "",
        repo: str = "",
        operation: str = "",
    ) -> None:
        """Set tracing context for current execution."""
        if correlation_id:
            _correlation_id.set(correlation_id)
        if owner:
            _owner.set(owner)
        if repo:
            _repo.set(repo)
        if operation:
            _operation.set(operation)

    @staticmethod
    def get() -> Dict[str, str]:
        """Get current tracing context as dict."""
        return {
            "correlation_id": _correlation_id.get(),
            "owner": _owner.get(),
            "repo": _repo.get(),
            "operation": _operation.get(),
        }

    @staticmethod
    def get_correlation_id() -> str:
        return _correlation_id.get()

    @staticmethod
    def generate_correlation_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def get_log_prefix() -> str:
        """Short prefix for log lines in text mode."""
        parts = []
        corr = _correlation_id.get()
        if corr:
            parts.append(f"corr={corr[:8]}")
        if _owner.get() and _repo.get():
            parts.append(f"repo={_owner.get()}/{_repo.get()}")
        return f"[{' '.join(parts)}]" if parts else ""

    @staticmethod
    def clear() -> None:
        _correlation_id.set("")
        _owner.set("")
        _repo.set("")
        _operation.set("")
