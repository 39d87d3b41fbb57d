"""Test doubles shared across the suite."""

from __future__ import annotations

from typing import Any


class RecordingBackend:
    """LogBackend that keeps every call as ``(method, message, payload)``."""

    def __init__(self, info_enabled: bool = True, error_enabled: bool = True) -> None:
        self.info_enabled = info_enabled
        self.error_enabled = error_enabled
        self.calls: list[tuple[str, str, Any]] = []

    def is_info_enabled(self) -> bool:
        return self.info_enabled

    def is_error_enabled(self) -> bool:
        return self.error_enabled

    def info(self, fmt: str, *args: Any) -> None:
        self.calls.append(("info", fmt, args))

    def error(self, fmt: str, *args: Any) -> None:
        self.calls.append(("error", fmt, args))

    def info_exc(self, message: str, exc: BaseException) -> None:
        self.calls.append(("info_exc", message, exc))

    def error_exc(self, message: str, exc: BaseException) -> None:
        self.calls.append(("error_exc", message, exc))

    @property
    def methods(self) -> list[str]:
        return [call[0] for call in self.calls]


class CountingValue:
    """Value that counts how often it has been rendered."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.renders = 0

    def __str__(self) -> str:
        self.renders += 1
        return self.text


class BrokenValue:
    def __str__(self) -> str:
        raise RuntimeError("cannot render")


class AccountService:
    """Stands in for an application object passed as ``actor_or_logger``."""
