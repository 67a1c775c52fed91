"""SafeStore error types.

Operational failures are values: every store operation returns a StoreResult
carrying an ErrorKind. Exceptions are kept for faults outside that taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class SafeStoreError(Exception):
    """Base exception for all SafeStore failures."""


class SafeStoreConfigError(SafeStoreError):
    """Raised for invalid runtime configuration."""


class StoreOperationError(SafeStoreError):
    """Raised by StoreResult.unwrap() for a failed result."""

    def __init__(self, kind: "ErrorKind", message: str) -> None:
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind


class ErrorKind(str, Enum):
    INVALID_NAME = "InvalidName"
    ALREADY_EXISTS = "AlreadyExists"
    NOT_FOUND = "NotFound"
    SOURCE_UNREADABLE = "SourceUnreadable"
    DESTINATION_UNWRITABLE = "DestinationUnwritable"
    AUTHENTICATION_FAILED = "AuthenticationFailed"
    BUSY = "Busy"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of a store operation.

    Attributes:
        value: Payload on success (None for operations without one).
        error: Error kind on failure, None on success.
        message: Human-readable detail for console output only.
    """

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None, message: str = "") -> "StoreResult[T]":
        return cls(value=value, message=message)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "StoreResult[T]":
        return cls(error=error, message=message)

    def unwrap(self) -> T:
        """Return the value or raise StoreOperationError."""
        if self.error is not None:
            raise StoreOperationError(self.error, self.message)
        return self.value  # type: ignore[return-value]
