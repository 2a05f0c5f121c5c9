"""
Domain layer - Pure business logic with zero framework imports.

This package contains the credential validation, normalization, hashing
and orchestration logic. It defines its own port interface for storage,
keeping adapters and the HTTP layer decoupled from the core.
"""

from .credentials import RESOURCE_NAME, CredentialService
from .exceptions import (
    ClassifiedError,
    CredentialError,
    ErrorKind,
    HashingError,
    StoreError,
    StoreFailure,
    classify,
)
from .hashing import SecretHasher
from .ports import REDACTED, Credential, CredentialStore, CredentialView
from .validation import normalize_email, validate_email, validate_password

__all__ = [
    "REDACTED",
    "RESOURCE_NAME",
    "ClassifiedError",
    "Credential",
    "CredentialError",
    "CredentialService",
    "CredentialStore",
    "CredentialView",
    "ErrorKind",
    "HashingError",
    "SecretHasher",
    "StoreError",
    "StoreFailure",
    "classify",
    "normalize_email",
    "validate_email",
    "validate_password",
]
