"""Turns an operation and its outcome into one log call.

Field order is fixed: ``operation``, the operation's context fields,
``outcome``, the terminal's own fields and, for failures with an attached
exception, ``exception`` last.

Started and success lines go to the backend as a ``{}`` format string plus
arguments so structured backends see the raw values. Failure lines are
flattened into a single ``key=value`` string because the exception travels
to the backend as its own argument.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from outcome_log.backend import LogBackend, resolve_backend
from outcome_log.core.enums import OutcomeStatus
from outcome_log.parameters import Deferred

if TYPE_CHECKING:
    from outcome_log.outcome import Failure, Operation, Yield

OPERATION_KEY = "operation"
OUTCOME_KEY = "outcome"
EXCEPTION_KEY = "exception"


def build_format_string(fields: Mapping[str, Any]) -> str:
    return " ".join(f"{key}={{}}" for key in fields)


def build_arguments(fields: Mapping[str, Any]) -> tuple[Any, ...]:
    return tuple(fields.values())


def flatten(fields: Mapping[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in fields.items())


def exception_text(exc: BaseException) -> str:
    """``Type: message`` form of *exc*, as a traceback headline shows it.

    Built from the type and ``str(exc)`` only, so notes added with
    ``add_note`` never replace the message.
    """
    cls = type(exc)
    name = cls.__qualname__
    if cls.__module__ not in ("builtins", "__main__"):
        name = f"{cls.__module__}.{name}"
    message = str(Deferred(exc))
    return f"{name}: {message}" if message else name


class LogFormatter:
    """Formats and emits outcome lines through one backend."""

    def __init__(self, actor_or_logger: Any) -> None:
        self.backend: LogBackend = resolve_backend(actor_or_logger)

    # -- emission -----------------------------------------------------------

    def log_started(self, operation: Operation) -> None:
        if self.backend.is_info_enabled():
            fields = self._operation_fields(operation)
            self.backend.info(build_format_string(fields), *build_arguments(fields))

    def log_success(
        self, operation: Operation, yield_: Yield, level: int = logging.INFO
    ) -> None:
        operation._mark_terminated()
        if not self._enabled(level):
            return
        fields = self.success_fields(operation, yield_)
        emit = self.backend.error if level >= logging.ERROR else self.backend.info
        emit(build_format_string(fields), *build_arguments(fields))

    def log_failure(
        self, operation: Operation, failure: Failure, level: int = logging.ERROR
    ) -> None:
        operation._mark_terminated()
        if not self._enabled(level):
            return
        message = self.build_failure_message(operation, failure)
        error = level >= logging.ERROR
        if failure.did_throw:
            emit_exc = self.backend.error_exc if error else self.backend.info_exc
            emit_exc(message, failure.thrown)
        else:
            emit = self.backend.error if error else self.backend.info
            emit(message)

    # -- field assembly -----------------------------------------------------

    def success_fields(self, operation: Operation, yield_: Yield) -> dict[str, Any]:
        fields = self._operation_fields(operation)
        fields[OUTCOME_KEY] = OutcomeStatus.SUCCESS.value
        fields.update(yield_.parameters)
        return fields

    def failure_fields(self, operation: Operation, failure: Failure) -> dict[str, Any]:
        fields = self._operation_fields(operation)
        fields[OUTCOME_KEY] = OutcomeStatus.FAILURE.value
        fields.update(failure.parameters)
        if failure.did_throw:
            fields[EXCEPTION_KEY] = Deferred(exception_text(failure.thrown))
        return fields

    def build_failure_message(self, operation: Operation, failure: Failure) -> str:
        return flatten(self.failure_fields(operation, failure))

    def _operation_fields(self, operation: Operation) -> dict[str, Any]:
        fields: dict[str, Any] = {OPERATION_KEY: operation.name}
        fields.update(operation.parameters)
        return fields

    def _enabled(self, level: int) -> bool:
        if level >= logging.ERROR:
            return self.backend.is_error_enabled()
        return self.backend.is_info_enabled()
