"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresPersonRepository
from src.config.settings import get_settings
from src.domain.persons import PersonService
from src.domain.ports import PersonRepository
from src.domain.validation import PassportValidationHook


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_validation_hook() -> PassportValidationHook:
    """Create the validation hook from settings."""
    settings = get_settings()
    return PassportValidationHook(check_on_delete=settings.check_uniqueness_on_delete)


def get_repository(
    request: Request,
    hook: PassportValidationHook = Depends(get_validation_hook),
) -> PersonRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresPersonRepository(pool, hook)


def get_person_service(
    repository: PersonRepository = Depends(get_repository),
) -> PersonService:
    """
    Create person service with injected dependencies.

    The repository is resolved through Depends() so tests can override it.
    """
    return PersonService(repository=repository)
