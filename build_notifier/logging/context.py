"""Context propagation for structured logging.

Fields pushed here (project, build, recipient, ...) are attached to every
log record emitted inside the scope. Backed by contextvars, so concurrent
notifications in different threads keep separate context.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Get a copy of the current logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Returns:
        Token to pass to pop_log_context() to restore the previous state
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context saved in token."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields. Mostly useful in tests."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(project="Widget", build="#42"):
        ...     logger.info("Sending notifications")  # includes project and build
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
