"""Explicit success/failure values returned by the service layer."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

# Codes carried by Err mirror the HTTP status the API answers with
INVALID_REQUEST = "400"
CHECK_FAILED = "500"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful outcome carrying its value."""

    data: T

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """A failed outcome.

    Attributes:
        message: Human-readable reason, surfaced as ``error.message``
        code: Optional machine code (the HTTP status as a string)
    """

    message: str
    code: str | None = None

    @property
    def success(self) -> bool:
        return False


Result = Union[Ok[T], Err]
