"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryCredentialStore
from src.adapters.repository.postgres import run_migrations
from src.api.dependencies import get_store
from src.api.errors import register_exception_handlers
from src.api.v1 import router as v1_router
from src.config.settings import get_settings
from src.domain.exceptions import CredentialError, StoreError, classify
from src.domain.ports import CredentialStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Credential registration API v1 - Register and look up credentials",
    },
]


def configure_logging(level: str) -> None:
    """Configure root logging once; later calls only adjust the level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup (postgres backend)
    - Runs migrations on startup
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("Starting application...")

    if settings.credential_store == "memory":
        logger.warning("Using in-memory credential store; data is lost on shutdown")
        app.state.store = InMemoryCredentialStore()
        logger.info("Application startup complete")
        yield
        logger.info("Shutting down application...")
        return

    logger.info("Connecting to database...")

    # Create connection pool with explicit sizing
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.pool_timeout,
        open=True,
    )

    try:
        if settings.run_migrations:
            logger.info("Running database migrations...")
            run_migrations(pool)

        # Store pool in app state for dependency injection
        app.state.pool = pool

        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
    finally:
        pool.close()
        logger.info("Database connection pool closed")


settings = get_settings()

app = FastAPI(
    title="credstore",
    description="Credential registration API - Stores bcrypt-hashed credentials and returns redacted views",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept"],
)

register_exception_handlers(app)

app.include_router(v1_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check(store: CredentialStore = Depends(get_store)) -> dict[str, str]:
    """
    Health check endpoint with store validation.

    Returns 200 OK if application and store are healthy,
    a classified DATABASE_ERROR otherwise.
    """
    try:
        await run_in_threadpool(store.ping)
    except StoreError as e:
        logger.error("Health check failed: %s", e)
        raise CredentialError(classify(e)) from None

    return {"status": "healthy"}
