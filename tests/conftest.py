"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory credential store and service wiring
- PostgreSQL connection pool (skips when the database is unreachable)
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.memory import InMemoryCredentialStore
from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from src.domain.credentials import CredentialService
from src.domain.hashing import SecretHasher

# Minimum bcrypt cost keeps the suite fast; production cost is tested separately
FAST_ROUNDS = 4


@pytest.fixture
def hasher() -> SecretHasher:
    return SecretHasher(rounds=FAST_ROUNDS)


@pytest.fixture
def memory_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def service(memory_store: InMemoryCredentialStore, hasher: SecretHasher) -> CredentialService:
    """Credential service backed by the in-memory store."""
    return CredentialService(store=memory_store, hasher=hasher)


@pytest.fixture(scope="session")
def pg_pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool against DATABASE_URL with migrations applied.

    Tests depending on it are skipped when PostgreSQL is not reachable.
    """
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    try:
        pool.wait(timeout=3.0)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL not reachable at DATABASE_URL")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_credentials(pg_pool: ConnectionPool) -> None:
    """Empty the credentials table before a test."""
    with pg_pool.connection() as conn:
        conn.execute("DELETE FROM credentials")
        conn.commit()
