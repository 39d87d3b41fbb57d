"""Identity value types logged alongside operations."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserId(BaseModel):
    """Opaque user identifier.

    Logged raw (not display-wrapped) under the ``userId`` key so that
    backends can recognise and special-case it.
    """

    model_config = ConfigDict(frozen=True)

    value: str

    @classmethod
    def of(cls, value: str) -> UserId:
        return cls(value=value)

    def __str__(self) -> str:
        return self.value
