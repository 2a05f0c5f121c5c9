"""
In-memory repository adapter - Implements CredentialStore protocol.

Dictionary-backed store for development and tests. It mirrors the
constraints of the credentials table so the service sees the same
failure modes as with PostgreSQL.
"""

import re
import threading
from datetime import datetime

from src.domain.exceptions import StoreError, StoreFailure
from src.domain.ports import Credential

# Same shape as the credentials_email_check constraint: '%_@_%._%'
_EMAIL_CHECK = re.compile(r".+@.+\..+", re.DOTALL)


class InMemoryCredentialStore:
    """
    Implements CredentialStore protocol with a dict keyed by email.

    The lock makes check-and-insert atomic, standing in for the
    database UNIQUE constraint.
    """

    def __init__(self) -> None:
        self._credentials: dict[str, Credential] = {}
        self._lock = threading.Lock()

    def insert(self, email: str, secret_hash: str, created_at: datetime) -> Credential:
        if not _EMAIL_CHECK.fullmatch(email):
            raise StoreError(StoreFailure.CHECK_VIOLATION, "email check constraint violated")

        credential = Credential(email=email, secret_hash=secret_hash, created_at=created_at)
        with self._lock:
            if email in self._credentials:
                raise StoreError(StoreFailure.UNIQUE_VIOLATION, "email unique constraint violated")
            self._credentials[email] = credential
        return credential

    def find_by_email(self, email: str) -> Credential | None:
        with self._lock:
            return self._credentials.get(email)

    def ping(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._credentials)
