"""Outcome types returned by the user use cases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

T = TypeVar("T")


class UserErrorKind(Enum):
    """Reasons a user operation can fail."""

    VALIDATION_ERROR = auto()
    ALREADY_EXISTS = auto()
    NOT_FOUND = auto()
    INVALID_CREDENTIALS = auto()
    ACCOUNT_INACTIVE = auto()
    FORBIDDEN = auto()
    CONFLICT = auto()
    STORE_UNAVAILABLE = auto()


STORE_UNAVAILABLE_MESSAGE = "The user store is unavailable. Please try again later."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


@dataclass(frozen=True)
class UseCaseResult(Generic[T]):
    """Either a value or the kind of failure that prevented it."""

    value: T | None = None
    error: UserErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> UseCaseResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: UserErrorKind, message: str) -> UseCaseResult[T]:
        return cls(error=error, message=message)

    @classmethod
    def store_unavailable(cls) -> UseCaseResult[T]:
        return cls(error=UserErrorKind.STORE_UNAVAILABLE, message=STORE_UNAVAILABLE_MESSAGE)


__all__ = [
    "INVALID_CREDENTIALS_MESSAGE",
    "STORE_UNAVAILABLE_MESSAGE",
    "UseCaseResult",
    "UserErrorKind",
]
