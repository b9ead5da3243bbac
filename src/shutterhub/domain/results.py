"""Result type returned by every service action."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

UNEXPECTED_ERROR = "An unexpected error occurred"


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Discriminated outcome of an action.

    Failures carry a user-facing ``error`` message; ``code`` lets the HTTP
    layer pick a status without parsing the message.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    code: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: str = "invalid") -> "ActionResult[T]":
        return cls(success=False, error=error, code=code)

    @classmethod
    def unexpected(cls) -> "ActionResult[T]":
        return cls(success=False, error=UNEXPECTED_ERROR, code="unexpected")
