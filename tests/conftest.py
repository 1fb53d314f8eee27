"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- PostgreSQL connection pool (skips when the database is unreachable)
- In-memory repository and person service
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.memory import InMemoryPersonRepository
from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from src.domain.persons import PersonService
from src.domain.validation import PassportValidationHook


@pytest.fixture(scope="session")
def pg_pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool against the configured database, with migrations applied."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=5)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not available")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_persons(pg_pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean persons table before each test."""
    with pg_pool.connection() as conn:
        conn.execute("DELETE FROM persons")
        conn.commit()
    yield


@pytest.fixture
def memory_repository() -> InMemoryPersonRepository:
    return InMemoryPersonRepository(PassportValidationHook())


@pytest.fixture
def memory_service(memory_repository: InMemoryPersonRepository) -> PersonService:
    return PersonService(repository=memory_repository)
