"""
Unit tests for InMemoryCredentialStore.

Verifies the in-memory adapter reports the same failure modes as the
credentials table constraints.
"""

import threading
from datetime import datetime, timezone

import pytest

from src.adapters.repository.memory import InMemoryCredentialStore
from src.domain.exceptions import StoreError, StoreFailure


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TestInsert:
    """Tests for insert."""

    def test_insert_returns_credential(self, memory_store: InMemoryCredentialStore) -> None:
        created_at = _now()
        credential = memory_store.insert("user@example.com", "$2b$10$hash", created_at)

        assert credential.email == "user@example.com"
        assert credential.secret_hash == "$2b$10$hash"
        assert credential.created_at == created_at

    def test_duplicate_is_unique_violation(self, memory_store: InMemoryCredentialStore) -> None:
        memory_store.insert("user@example.com", "$2b$10$hash1", _now())

        with pytest.raises(StoreError) as exc_info:
            memory_store.insert("user@example.com", "$2b$10$hash2", _now())

        assert exc_info.value.failure is StoreFailure.UNIQUE_VIOLATION
        assert memory_store.find_by_email("user@example.com").secret_hash == "$2b$10$hash1"

    @pytest.mark.parametrize("email", ["@b.co", "a@.co", "a@b.", "a.b@c", "ab"])
    def test_check_constraint(self, memory_store: InMemoryCredentialStore, email: str) -> None:
        with pytest.raises(StoreError) as exc_info:
            memory_store.insert(email, "$2b$10$hash", _now())
        assert exc_info.value.failure is StoreFailure.CHECK_VIOLATION
        assert len(memory_store) == 0

    def test_concurrent_inserts_exactly_one_wins(
        self, memory_store: InMemoryCredentialStore
    ) -> None:
        results: list[bool] = []
        results_lock = threading.Lock()

        def insert() -> None:
            try:
                memory_store.insert("race@example.com", "$2b$10$hash", _now())
                ok = True
            except StoreError:
                ok = False
            with results_lock:
                results.append(ok)

        threads = [threading.Thread(target=insert) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
        assert results.count(False) == 9


class TestFindByEmail:
    """Tests for find_by_email."""

    def test_absent_returns_none(self, memory_store: InMemoryCredentialStore) -> None:
        assert memory_store.find_by_email("nobody@example.com") is None

    def test_exact_match_only(self, memory_store: InMemoryCredentialStore) -> None:
        """The store compares canonical keys as-is; normalization is the service's job."""
        memory_store.insert("user@example.com", "$2b$10$hash", _now())
        assert memory_store.find_by_email("USER@example.com") is None
        assert memory_store.find_by_email("user@example.com") is not None
