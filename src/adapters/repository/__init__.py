"""Repository adapters - Credential store implementations."""

from .memory import InMemoryCredentialStore
from .postgres import PostgresCredentialStore, run_migrations

__all__ = ["InMemoryCredentialStore", "PostgresCredentialStore", "run_migrations"]
