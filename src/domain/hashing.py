"""
Secret hasher - bcrypt one-way password hashing.

Every call draws a fresh salt via bcrypt.gensalt(), embedded in the
output, so hashing the same password twice yields different strings.
Stored hashes must only ever be checked with bcrypt.checkpw (constant
time), never by comparing strings.
"""

import logging
from dataclasses import dataclass

import bcrypt

from .exceptions import HashingError

logger = logging.getLogger(__name__)

# bcrypt work factor used unless configured otherwise (>= 10)
DEFAULT_ROUNDS = 10

# bcrypt only reads this many bytes of the password
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class SecretHasher:
    """bcrypt hasher with a fixed work factor shared by all calls."""

    rounds: int = DEFAULT_ROUNDS

    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext password.

        The UTF-8 encoding is truncated to MAX_PASSWORD_BYTES before
        hashing, so longer passwords are accepted and only their first
        72 bytes are significant (the classic bcrypt behaviour; current
        bcrypt releases raise on longer input instead).

        Raises:
            HashingError: On any bcrypt or entropy failure. The plaintext
                is never part of the message or the logs.
        """
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            secret = plaintext.encode("utf-8")[:MAX_PASSWORD_BYTES]
            return bcrypt.hashpw(secret, salt).decode("utf-8")
        except Exception as e:
            logger.error("Password hashing failed: %s", type(e).__name__)
            raise HashingError("Password hashing failed") from None
