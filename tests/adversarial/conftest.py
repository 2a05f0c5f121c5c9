"""
Shared fixtures for adversarial tests.

Provides service wiring against PostgreSQL and the in-memory store so the
same attack scenarios run against both backends.
"""

import pytest

from src.adapters.repository.memory import InMemoryCredentialStore
from src.adapters.repository.postgres import PostgresCredentialStore
from src.domain.credentials import CredentialService
from src.domain.hashing import SecretHasher

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture(params=["memory", "postgres"])
def attacked_service(request: pytest.FixtureRequest) -> CredentialService:
    """Credential service on each backend; postgres skips without a database."""
    hasher = SecretHasher(rounds=4)
    if request.param == "memory":
        return CredentialService(store=InMemoryCredentialStore(), hasher=hasher)

    pool = request.getfixturevalue("pg_pool")
    request.getfixturevalue("clean_credentials")
    return CredentialService(store=PostgresCredentialStore(pool), hasher=hasher)
