"""
Credential domain service - registration and redacted lookup.

Write path:  validate email -> validate password -> normalize -> hash -> insert
Read path:   validate email -> normalize -> find -> redact

Every failure, whatever its origin (validator, hasher, store, or an
unexpected bug), leaves the service as a CredentialError carrying exactly
one ClassifiedError. Raw store or driver details are logged here and
never forwarded.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .exceptions import ClassifiedError, CredentialError, ErrorKind, classify
from .hashing import SecretHasher
from .ports import CredentialStore, CredentialView
from .validation import normalize_email, validate_email, validate_password

logger = logging.getLogger(__name__)

# Resource name used in not-found responses
RESOURCE_NAME = "User"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CredentialService:
    """
    Domain service for credential registration and lookup.

    The store (and the connection pool behind it) is injected; the service
    holds no other shared state.
    """

    store: CredentialStore
    hasher: SecretHasher = field(default_factory=SecretHasher)

    def register(self, email: str, password: str) -> CredentialView:
        """
        Register a new credential.

        Args:
            email: Raw email address (validated, then normalized)
            password: Plaintext password (validated, then hashed)

        Returns:
            Redacted view with the normalized email

        Raises:
            CredentialError: VALIDATION, INVALID_EMAIL, CONFLICT,
                HASHING_FAILURE, DATABASE_ERROR or INTERNAL
        """
        try:
            validate_email(email)
            validate_password(password)
            normalized_email = normalize_email(email)
            secret_hash = self.hasher.hash(password)
            credential = self.store.insert(normalized_email, secret_hash, _utcnow())
        except Exception as e:
            raise self._classified("register", e) from None

        logger.info("Credential registered: %s", credential.email)
        return CredentialView.of(credential)

    def lookup(self, email: str) -> CredentialView:
        """
        Look up a credential by email.

        Matching is case- and surrounding-whitespace-insensitive.

        Raises:
            CredentialError: VALIDATION, INVALID_EMAIL, NOT_FOUND,
                DATABASE_ERROR or INTERNAL
        """
        try:
            validate_email(email)
            normalized_email = normalize_email(email)
            credential = self.store.find_by_email(normalized_email)
        except Exception as e:
            raise self._classified("lookup", e) from None

        if credential is None:
            logger.debug("Credential lookup miss: %s", normalized_email)
            raise CredentialError(ClassifiedError.not_found(RESOURCE_NAME))

        return CredentialView.of(credential)

    def _classified(self, operation: str, exc: Exception) -> CredentialError:
        """Resolve a failure to a CredentialError, logging server-side detail."""
        error = classify(exc)

        if error.kind in (ErrorKind.DATABASE_ERROR, ErrorKind.HASHING_FAILURE):
            logger.error("%s failed (%s): %r", operation, error.kind.code, exc)
        elif error.kind is ErrorKind.INTERNAL:
            logger.error("%s failed with unexpected error", operation, exc_info=exc)
        elif error.kind is ErrorKind.CONFLICT:
            logger.info("%s rejected: email already exists", operation)

        return CredentialError(error)
