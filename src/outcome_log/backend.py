"""Logging backends that outcome lines are emitted through.

An ``actor_or_logger`` is either a logger handle (a :class:`LogBackend`,
a stdlib ``logging.Logger``/``LoggerAdapter`` or a structlog bound logger)
or any other object, in which case a stdlib logger named after the object's
class is used.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence, runtime_checkable

import structlog

from outcome_log.core.errors import require


@runtime_checkable
class LogBackend(Protocol):
    """Backend capability consumed by :class:`~outcome_log.formatter.LogFormatter`.

    ``info``/``error`` take a ``{}``-placeholder format string plus positional
    arguments; ``info_exc``/``error_exc`` take a pre-rendered message and the
    exception whose traceback the backend should render.
    """

    def is_info_enabled(self) -> bool:
        ...

    def is_error_enabled(self) -> bool:
        ...

    def info(self, fmt: str, *args: Any) -> None:
        ...

    def error(self, fmt: str, *args: Any) -> None:
        ...

    def info_exc(self, message: str, exc: BaseException) -> None:
        ...

    def error_exc(self, message: str, exc: BaseException) -> None:
        ...


class BraceMessage:
    """``{}``-style message rendered lazily, when a handler calls ``str()``."""

    __slots__ = ("fmt", "args")

    def __init__(self, fmt: str, args: Sequence[Any]) -> None:
        self.fmt = fmt
        self.args = tuple(args)

    def __str__(self) -> str:
        pieces = self.fmt.split("{}")
        out = [pieces[0]]
        for i, piece in enumerate(pieces[1:]):
            out.append(str(self.args[i]) if i < len(self.args) else "{}")
            out.append(piece)
        return "".join(out)

    def __repr__(self) -> str:
        return f"BraceMessage({self.fmt!r}, {self.args!r})"


class StdlibBackend:
    """Adapts a ``logging.Logger`` or ``logging.LoggerAdapter``."""

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter) -> None:
        self._logger = logger

    @property
    def logger(self) -> logging.Logger | logging.LoggerAdapter:
        return self._logger

    def is_info_enabled(self) -> bool:
        return self._logger.isEnabledFor(logging.INFO)

    def is_error_enabled(self) -> bool:
        return self._logger.isEnabledFor(logging.ERROR)

    def info(self, fmt: str, *args: Any) -> None:
        self._logger.info(BraceMessage(fmt, args))

    def error(self, fmt: str, *args: Any) -> None:
        self._logger.error(BraceMessage(fmt, args))

    def info_exc(self, message: str, exc: BaseException) -> None:
        self._logger.info(message, exc_info=exc)

    def error_exc(self, message: str, exc: BaseException) -> None:
        self._logger.error(message, exc_info=exc)


class StructlogBackend:
    """Adapts a structlog bound logger.

    structlog renders the event eagerly, so messages are only built once the
    level check has passed.
    """

    def __init__(self, logger: Any) -> None:
        self._logger = logger

    @property
    def logger(self) -> Any:
        return self._logger

    def _enabled(self, level: int) -> bool:
        check = getattr(self._logger, "isEnabledFor", None) or getattr(
            self._logger, "is_enabled_for", None
        )
        return True if check is None else bool(check(level))

    def is_info_enabled(self) -> bool:
        return self._enabled(logging.INFO)

    def is_error_enabled(self) -> bool:
        return self._enabled(logging.ERROR)

    def info(self, fmt: str, *args: Any) -> None:
        self._logger.info(str(BraceMessage(fmt, args)))

    def error(self, fmt: str, *args: Any) -> None:
        self._logger.error(str(BraceMessage(fmt, args)))

    def info_exc(self, message: str, exc: BaseException) -> None:
        self._logger.info(message, exc_info=exc)

    def error_exc(self, message: str, exc: BaseException) -> None:
        self._logger.error(message, exc_info=exc)


def logger_name_for(owner: Any) -> str:
    """Dotted ``module.QualName`` of *owner*'s class (or of *owner* if a class)."""
    cls = owner if isinstance(owner, type) else type(owner)
    return f"{cls.__module__}.{cls.__qualname__}"


def _is_structlog_logger(candidate: Any) -> bool:
    # structlog.get_logger() hands out lazy proxies, not BoundLoggerBase
    if isinstance(candidate, structlog.BoundLoggerBase):
        return True
    return type(candidate).__module__.partition(".")[0] == "structlog"


def resolve_backend(actor_or_logger: Any) -> LogBackend:
    """Return the backend for a logger handle, or one named after an owner."""
    require(actor_or_logger, "require actor or logger")
    if isinstance(actor_or_logger, LogBackend):
        return actor_or_logger
    if isinstance(actor_or_logger, (logging.Logger, logging.LoggerAdapter)):
        return StdlibBackend(actor_or_logger)
    if _is_structlog_logger(actor_or_logger):
        return StructlogBackend(actor_or_logger)
    return StdlibBackend(logging.getLogger(logger_name_for(actor_or_logger)))
