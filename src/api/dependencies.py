"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresCredentialStore
from src.config.settings import Settings, get_settings
from src.domain.credentials import CredentialService
from src.domain.hashing import SecretHasher
from src.domain.ports import CredentialStore


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_store(request: Request) -> CredentialStore:
    """
    Get the credential store.

    An in-process store placed on app.state (memory backend) takes
    precedence; otherwise a PostgreSQL store wraps the shared pool.
    """
    store = getattr(request.app.state, "store", None)
    if store is not None:
        return store
    return PostgresCredentialStore(get_pool(request))


def get_hasher(settings: Settings = Depends(get_settings)) -> SecretHasher:
    """Create hasher with the configured bcrypt work factor."""
    return SecretHasher(rounds=settings.bcrypt_cost)


def get_credential_service(
    store: CredentialStore = Depends(get_store),
    hasher: SecretHasher = Depends(get_hasher),
) -> CredentialService:
    """
    Create credential service with injected dependencies.

    Wires together the store and hasher for the domain service.
    """
    return CredentialService(store=store, hasher=hasher)
