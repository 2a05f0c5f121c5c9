"""
PostgreSQL repository adapter - Implements CredentialStore protocol.

This module provides the PostgreSQL implementation of the domain's
credential store port using psycopg3 with raw SQL.

Constraint Mapping:
-------------------
The credentials table owns two email constraints (see migrations/):

1. **credentials_email_key** (UNIQUE): concurrent inserts for the same
   canonical email race here; exactly one wins, the rest are reported
   as StoreFailure.UNIQUE_VIOLATION.

2. **credentials_email_check** (CHECK): a coarse format check that backs
   up the domain validator; reported as StoreFailure.CHECK_VIOLATION.

Any other psycopg error (including pool timeouts) is StoreFailure.OTHER.
Only the primary message and SQLSTATE are kept on the StoreError, since
the DETAIL field of a violation can echo the whole failing row.
"""

import logging
from datetime import datetime
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StoreError, StoreFailure
from src.domain.ports import Credential

logger = logging.getLogger(__name__)

EMAIL_UNIQUE_CONSTRAINT = "credentials_email_key"
EMAIL_CHECK_CONSTRAINT = "credentials_email_check"


def _store_error(e: psycopg.Error) -> StoreError:
    """Translate a psycopg error into a StoreError."""
    constraint = e.diag.constraint_name if e.diag else None

    if isinstance(e, errors.UniqueViolation) and constraint == EMAIL_UNIQUE_CONSTRAINT:
        failure = StoreFailure.UNIQUE_VIOLATION
    elif isinstance(e, errors.CheckViolation) and constraint == EMAIL_CHECK_CONSTRAINT:
        failure = StoreFailure.CHECK_VIOLATION
    else:
        failure = StoreFailure.OTHER

    primary = e.diag.message_primary if e.diag else None
    return StoreError(failure, f"[{e.sqlstate or type(e).__name__}] {primary or 'database error'}")


class PostgresCredentialStore:
    """
    Implements CredentialStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def insert(self, email: str, secret_hash: str, created_at: datetime) -> Credential:
        """
        Insert a new credential row.

        No ON CONFLICT clause: a duplicate email must surface as a
        unique violation so the service can report a conflict.

        Args:
            email: Normalized email address (lowercase, stripped)
            secret_hash: bcrypt hash from the domain layer
            created_at: Insertion timestamp

        Returns:
            The stored Credential as returned by the database

        Raises:
            StoreError: On constraint violations or any database failure
        """
        sql = """
            INSERT INTO credentials (email, password_hash, created_at)
            VALUES (%s, %s, %s)
            RETURNING email, password_hash, created_at
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email, secret_hash, created_at))
                row = cursor.fetchone()
                conn.commit()
        except psycopg.Error as e:
            raise _store_error(e) from e

        if row is None:
            raise StoreError(StoreFailure.OTHER, "INSERT returned no row")

        return Credential(email=row[0], secret_hash=row[1], created_at=row[2])

    def find_by_email(self, email: str) -> Credential | None:
        """
        Fetch a credential by exact canonical email.

        Args:
            email: Normalized email address

        Returns:
            Credential if present, None otherwise
        """
        sql = """
            SELECT email, password_hash, created_at
            FROM credentials
            WHERE email = %s
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise _store_error(e) from e

        if row is None:
            return None

        return Credential(email=row[0], secret_hash=row[1], created_at=row[2])

    def ping(self) -> None:
        """Validate database connectivity."""
        try:
            with self._pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.Error as e:
            raise _store_error(e) from e


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
