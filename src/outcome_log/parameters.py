"""Ordered key/value fields attached to operations and their outcomes.

Numbers are stored as-is so structured backends receive the real value.
Anything else is wrapped in :class:`Deferred`, which postpones ``str()``
until the log line is rendered: nothing is converted when the level is
disabled, and a value whose ``__str__`` fails cannot stop an outcome from
being logged.
"""

from __future__ import annotations

import numbers
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from outcome_log.core.errors import InvalidArgument


class Deferred:
    """Holds a value and renders it with ``str()`` only when asked."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __str__(self) -> str:
        try:
            return str(self.value)
        except Exception as exc:
            return f"<unprintable {type(self.value).__name__}: {exc!r}>"

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        return f"Deferred({self.value!r})"


def is_numeric(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def field_key(key: Any) -> str:
    """Normalise a ``str`` or enum key, rejecting anything else."""
    if isinstance(key, Enum):
        key = key.value
    if key is None:
        raise InvalidArgument("require key")
    if not isinstance(key, str):
        raise InvalidArgument(f"key must be a string, got {type(key).__name__}")
    if "{}" in key:
        raise InvalidArgument(f"key must not contain a {{}} placeholder: {key!r}")
    return key


class ParameterSet:
    """Insertion-ordered fields; the order is the emission order."""

    def __init__(self) -> None:
        self._params: dict[str, Any] = {}

    def store_raw(self, key: Any, value: Any) -> None:
        self._params[field_key(key)] = value

    def store_display(self, key: Any, value: Any) -> None:
        if is_numeric(value):
            self.store_raw(key, value)
        else:
            self._params[field_key(key)] = Deferred(value)

    def snapshot(self) -> Mapping[str, Any]:
        """Read-only copy of the fields, in insertion order."""
        return MappingProxyType(dict(self._params))

    def __len__(self) -> int:
        return len(self._params)

    def __contains__(self, key: object) -> bool:
        return key in self._params
