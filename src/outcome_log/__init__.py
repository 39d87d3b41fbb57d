"""Structured ``key=value`` logging of operation outcomes.

Public API
----------
::

    from outcome_log import (
        operation,
        Operation,
        Yield,
        Failure,
        DomainObjectKey,
        UserId,
    )
"""

from __future__ import annotations

from outcome_log.backend import (
    BraceMessage,
    LogBackend,
    StdlibBackend,
    StructlogBackend,
    resolve_backend,
)
from outcome_log.core.enums import DomainObjectKey, OutcomeStatus
from outcome_log.core.errors import (
    InvalidArgument,
    OutcomeLogError,
    UnterminatedOperation,
)
from outcome_log.core.ids import UserId
from outcome_log.formatter import LogFormatter
from outcome_log.outcome import (
    Failure,
    LoggingTerminal,
    Operation,
    Yield,
    operation,
)
from outcome_log.parameters import Deferred, ParameterSet

__all__ = [
    # Core
    "operation",
    "Operation",
    "Yield",
    "Failure",
    "LoggingTerminal",
    "LogFormatter",
    "ParameterSet",
    "Deferred",
    # Keys and values
    "DomainObjectKey",
    "OutcomeStatus",
    "UserId",
    # Backends
    "LogBackend",
    "StdlibBackend",
    "StructlogBackend",
    "BraceMessage",
    "resolve_backend",
    # Errors
    "OutcomeLogError",
    "InvalidArgument",
    "UnterminatedOperation",
]
