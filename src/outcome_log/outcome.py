"""Operations and their outcomes.

Typical use::

    with operation("fetchUser").with_("userId", user_id).started(self) as op:
        user = repo.fetch(user_id)
        op.was_successful().yielding("email", user.email).log(self)

Leaving the ``with`` block without logging an outcome logs a failure at
error level, with an :class:`UnterminatedOperation` traceback pointing at
the place the block was left.
"""

from __future__ import annotations

import inspect
import logging
from types import TracebackType
from typing import Any, Mapping, Protocol

from outcome_log.core.enums import DomainObjectKey
from outcome_log.core.errors import UnterminatedOperation, require
from outcome_log.core.ids import UserId
from outcome_log.formatter import LogFormatter
from outcome_log.parameters import ParameterSet


class LoggingTerminal(Protocol):
    """An outcome that can be logged, terminating its operation."""

    def log(self, actor_or_logger: Any = None) -> None:
        ...


def _traceback_from_caller(skip: int) -> TracebackType | None:
    """Traceback covering the live stack, minus the innermost *skip* frames."""
    frame = inspect.currentframe()
    for _ in range(skip + 1):
        if frame is None:
            break
        frame = frame.f_back
    tb: TracebackType | None = None
    while frame is not None:
        tb = TracebackType(tb, frame, frame.f_lasti, frame.f_lineno)
        frame = frame.f_back
    return tb


class Operation:
    """A named unit of work whose start and outcome are logged."""

    def __init__(self, name: str) -> None:
        self._name: str = require(name, "require operation")
        self._parameters = ParameterSet()
        self._terminated = False
        self._actor_or_logger: Any = None

    @classmethod
    def create(cls, name: str) -> Operation:
        return cls(name)

    # -- read-only ----------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def parameters(self) -> Mapping[str, Any]:
        return self._parameters.snapshot()

    @property
    def terminated(self) -> bool:
        return self._terminated

    @property
    def actor_or_logger(self) -> Any:
        """Whatever was passed to :meth:`started`, or ``None``."""
        return self._actor_or_logger

    # -- builders -----------------------------------------------------------

    def with_(self, key: str | DomainObjectKey, value: Any) -> Operation:
        self._parameters.store_display(key, value)
        return self

    def with_user_id(self, user_id: UserId) -> Operation:
        self._parameters.store_raw(DomainObjectKey.USER_ID, user_id)
        return self

    def started(self, actor_or_logger: Any) -> Operation:
        """Log the operation as in progress, at info level."""
        formatter = LogFormatter(actor_or_logger)
        self._actor_or_logger = actor_or_logger
        formatter.log_started(self)
        return self

    def was_successful(self) -> Yield:
        return Yield(self)

    def was_failure(self) -> Failure:
        return Failure(self)

    # -- release ------------------------------------------------------------

    def close(self) -> None:
        """Log a failure if no outcome has been logged yet."""
        self._release(None)

    def __enter__(self) -> Operation:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._release(exc)

    def _release(self, cause: BaseException | None) -> None:
        if self._terminated:
            return
        # skip _release and close/__exit__
        diagnostic = UnterminatedOperation(self._name).with_traceback(
            _traceback_from_caller(skip=2)
        )
        diagnostic.__cause__ = cause
        self.was_failure().throwing_exception(diagnostic).log(self._default_target())

    def _default_target(self) -> Any:
        if self._actor_or_logger is not None:
            return self._actor_or_logger
        return self

    def _mark_terminated(self) -> None:
        self._terminated = True

    def __repr__(self) -> str:
        return f"Operation({self._name!r}, terminated={self._terminated})"


class Yield:
    """Successful outcome of an :class:`Operation`."""

    def __init__(self, operation: Operation) -> None:
        self._operation = operation
        self._parameters = ParameterSet()

    @property
    def operation(self) -> Operation:
        return self._operation

    @property
    def parameters(self) -> Mapping[str, Any]:
        return self._parameters.snapshot()

    def yielding(self, key: str | DomainObjectKey, value: Any) -> Yield:
        self._parameters.store_display(key, value)
        return self

    def yielding_user_id(self, user_id: UserId) -> Yield:
        self._parameters.store_raw(DomainObjectKey.USER_ID, user_id)
        return self

    def log(self, actor_or_logger: Any = None) -> None:
        self.log_info(actor_or_logger)

    def log_info(self, actor_or_logger: Any = None) -> None:
        self._emit(actor_or_logger, logging.INFO)

    def log_error(self, actor_or_logger: Any = None) -> None:
        self._emit(actor_or_logger, logging.ERROR)

    def _emit(self, actor_or_logger: Any, level: int) -> None:
        if actor_or_logger is None:
            actor_or_logger = self._operation._default_target()
        LogFormatter(actor_or_logger).log_success(self._operation, self, level)


class Failure:
    """Failed outcome of an :class:`Operation`, with an optional exception."""

    def __init__(self, operation: Operation) -> None:
        self._operation = operation
        self._parameters = ParameterSet()
        self._thrown: BaseException | None = None

    @property
    def operation(self) -> Operation:
        return self._operation

    @property
    def parameters(self) -> Mapping[str, Any]:
        return self._parameters.snapshot()

    @property
    def did_throw(self) -> bool:
        return self._thrown is not None

    @property
    def thrown(self) -> BaseException | None:
        return self._thrown

    def throwing_exception(self, exc: BaseException) -> Failure:
        self._thrown = require(exc, "require exception")
        return self

    def with_message(self, message: str) -> Failure:
        self._parameters.store_display("errorMessage", message)
        return self

    def with_detail(self, key: str | DomainObjectKey, detail: Any) -> Failure:
        self._parameters.store_display(key, detail)
        return self

    def log(self, actor_or_logger: Any = None) -> None:
        self.log_error(actor_or_logger)

    def log_info(self, actor_or_logger: Any = None) -> None:
        self._emit(actor_or_logger, logging.INFO)

    def log_error(self, actor_or_logger: Any = None) -> None:
        self._emit(actor_or_logger, logging.ERROR)

    def _emit(self, actor_or_logger: Any, level: int) -> None:
        if actor_or_logger is None:
            actor_or_logger = self._operation._default_target()
        LogFormatter(actor_or_logger).log_failure(self._operation, self, level)


def operation(name: str) -> Operation:
    """Start building an :class:`Operation` called *name*."""
    return Operation(name)
