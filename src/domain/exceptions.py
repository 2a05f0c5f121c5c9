"""
Domain exceptions - Error taxonomy for credential registration.

This module defines the closed set of error kinds the credential service
can report, the classified error shape handed to the boundary, and the
mapper that turns any internal failure into exactly one classified error.

Errors are tagged variants (ErrorKind) carried by a single exception type,
not an inheritance tree. Store and hasher faults have their own exception
types so adapters never need to know about the taxonomy.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """
    Closed error taxonomy.

    The value of each member is the stable error code exposed to callers.
    """

    VALIDATION = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFLICT = "RESOURCE_CONFLICT"
    HASHING_FAILURE = "PASSWORD_HASHING_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL = "INTERNAL_ERROR"

    @property
    def code(self) -> str:
        return self.value


@dataclass(frozen=True)
class ClassifiedError:
    """Externally visible error: kind, safe message, optional safe details."""

    kind: ErrorKind
    message: str
    details: dict[str, Any] | None = field(default=None)

    @classmethod
    def validation(cls, message: str) -> "ClassifiedError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def invalid_email(cls, email: str) -> "ClassifiedError":
        return cls(ErrorKind.INVALID_EMAIL, "Invalid email format", {"email": email})

    @classmethod
    def not_found(cls, resource: str) -> "ClassifiedError":
        return cls(ErrorKind.NOT_FOUND, f"{resource} not found", {"resource": resource})

    @classmethod
    def conflict(cls, message: str) -> "ClassifiedError":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def hashing_failure(cls) -> "ClassifiedError":
        return cls(ErrorKind.HASHING_FAILURE, "Password processing failed")

    @classmethod
    def database_error(cls) -> "ClassifiedError":
        return cls(ErrorKind.DATABASE_ERROR, "A database error occurred")

    @classmethod
    def internal(cls) -> "ClassifiedError":
        return cls(ErrorKind.INTERNAL, "An internal error occurred")


class CredentialError(Exception):
    """
    The only exception that leaves the credential service.

    Wraps a ClassifiedError; str() is the safe message.
    """

    def __init__(self, error: ClassifiedError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


class StoreFailure(Enum):
    """Failure modes reported by a CredentialStore insert."""

    UNIQUE_VIOLATION = "unique_violation"
    CHECK_VIOLATION = "check_violation"
    OTHER = "other"


class StoreError(Exception):
    """Raised by store adapters; never crosses the service boundary."""

    def __init__(self, failure: StoreFailure, message: str = "Credential store failure") -> None:
        super().__init__(message)
        self.failure = failure


class HashingError(Exception):
    """Raised by the secret hasher. Never carries the plaintext."""

    pass


def classify(exc: BaseException) -> ClassifiedError:
    """
    Map any failure to exactly one ClassifiedError.

    Pure and total: unknown exceptions become INTERNAL. Raw store or
    driver text is never copied into the result.
    """
    if isinstance(exc, CredentialError):
        return exc.error
    if isinstance(exc, StoreError):
        if exc.failure is StoreFailure.UNIQUE_VIOLATION:
            return ClassifiedError.conflict("Email address already exists")
        if exc.failure is StoreFailure.CHECK_VIOLATION:
            return ClassifiedError.validation("Email format is invalid")
        return ClassifiedError.database_error()
    if isinstance(exc, HashingError):
        return ClassifiedError.hashing_failure()
    return ClassifiedError.internal()
