"""
Input validation and normalization for credentials.

The email check is a syntactic smoke-test (an "@" and a "." somewhere),
not RFC 5322 validation. The store enforces its own format check as a
second line of defense.
"""

from .exceptions import ClassifiedError, CredentialError

MIN_PASSWORD_LENGTH = 8


def validate_email(email: str) -> None:
    """
    Check that an email is non-empty and looks like an address.

    Raises:
        CredentialError: VALIDATION if empty, INVALID_EMAIL if "@" or "." is missing
    """
    if not email:
        raise CredentialError(ClassifiedError.validation("Email cannot be empty"))
    if "@" not in email or "." not in email:
        raise CredentialError(ClassifiedError.invalid_email(email))


def validate_password(password: str) -> None:
    """
    Check password strength.

    Rules are checked in order and the first failure is reported:
    minimum length, ASCII uppercase, ASCII lowercase, ASCII digit.

    Raises:
        CredentialError: VALIDATION describing the first failed rule
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise CredentialError(
            ClassifiedError.validation(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        )
    if not any(c.isascii() and c.isupper() for c in password):
        raise CredentialError(
            ClassifiedError.validation("Password must contain at least one uppercase letter")
        )
    if not any(c.isascii() and c.islower() for c in password):
        raise CredentialError(
            ClassifiedError.validation("Password must contain at least one lowercase letter")
        )
    if not any(c.isascii() and c.isdigit() for c in password):
        raise CredentialError(
            ClassifiedError.validation("Password must contain at least one digit")
        )


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup: lowercase, then strip."""
    return email.lower().strip()
