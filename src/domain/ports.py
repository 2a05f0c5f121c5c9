"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the entities exchanged with infrastructure and the
interface (port) that credential storage adapters implement.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

# Placeholder returned instead of any stored secret.
REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class Credential:
    """
    Stored credential record.

    secret_hash is an opaque bcrypt string and must never reach a caller.
    """

    email: str
    secret_hash: str
    created_at: datetime


@dataclass(frozen=True)
class CredentialView:
    """Redacted view of a credential returned to callers."""

    email: str
    secret: str = REDACTED

    @classmethod
    def of(cls, credential: Credential) -> "CredentialView":
        return cls(email=credential.email)


class CredentialStore(Protocol):
    """Port interface for credential persistence."""

    def insert(self, email: str, secret_hash: str, created_at: datetime) -> Credential:
        """
        Persist a new credential.

        The store owns the uniqueness invariant on email; concurrent
        inserts for the same email must let at most one succeed.

        Args:
            email: Canonical email address
            secret_hash: bcrypt hash of the password
            created_at: Insertion timestamp (timezone-aware)

        Returns:
            The stored Credential

        Raises:
            StoreError: UNIQUE_VIOLATION if the email exists,
                CHECK_VIOLATION if the store rejects the email format,
                OTHER for any other storage fault
        """
        ...

    def find_by_email(self, email: str) -> Credential | None:
        """
        Find a credential by exact canonical email.

        Returns:
            The Credential, or None if absent (absence is not an error)

        Raises:
            StoreError: OTHER for storage faults
        """
        ...

    def ping(self) -> None:
        """Check store connectivity; raise StoreError if unreachable."""
        ...
