"""Custom exception hierarchy for outcome logging."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


class OutcomeLogError(Exception):
    """Base exception for all outcome-log errors."""


# --- Caller contract ---
class InvalidArgument(OutcomeLogError, ValueError):
    """A required argument (name, key, exception, actor) was absent."""


def require(value: T | None, message: str) -> T:
    """Return *value*, raising :class:`InvalidArgument` if it is ``None``."""
    if value is None:
        raise InvalidArgument(message)
    return value


# --- Automatic release ---
class UnterminatedOperation(OutcomeLogError, RuntimeError):
    """Diagnostic attached to an operation released without an outcome.

    Never raised to callers; it only exists so the auto-release log entry
    carries a stack trace pointing at the forgotten termination.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"operation auto-closed: {operation}")
