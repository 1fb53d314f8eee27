"""Repository adapters - Database and in-memory implementations."""

from .memory import InMemoryPersonRepository
from .postgres import PostgresPersonRepository, run_migrations

__all__ = ["InMemoryPersonRepository", "PostgresPersonRepository", "run_migrations"]
