"""
PostgreSQL repository adapter - Implements PersonRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness Under Concurrency:
-----------------------------
Checking uniqueness in the application and then writing is racy on its own.
Every mutation therefore runs in a single transaction that:

1. **pg_advisory_xact_lock()**: Serializes writers of the same
   country/normalized-passport pair. The lock is released at commit or
   rollback.

2. **Validation hook**: Runs against the active rows for the country, loaded
   after the lock is held.

3. **Partial unique index**: persons_country_passport_key on
   (country, regexp_replace(passport_number, '\\s', '', 'g'))
   WHERE deleted_at IS NULL is the storage-level backstop. A UniqueViolation
   is translated to PassportNotUnique.

Any exception inside the connection block rolls the transaction back, so a
rejected write leaves no row changed.
"""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

from psycopg import Cursor
from psycopg.errors import UniqueViolation
from psycopg_pool import ConnectionPool

from src.domain.countries import CountryCode, from_id
from src.domain.exceptions import PassportNotUnique, PersonNotFound
from src.domain.passport import normalize_passport_number
from src.domain.ports import PersonDraft, PersonRecord, PersonValidationHook

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, email, height, country, passport_number, deleted_at IS NOT NULL"


def _row_to_record(row: tuple[Any, ...]) -> PersonRecord:
    person_id, name, email, height, country_id, passport_number, deleted = row
    country = from_id(country_id)
    if country is None:
        logger.warning("Person %s references unknown country id %s", person_id, country_id)
    return PersonRecord(
        id=person_id,
        name=name,
        email=email,
        height=Decimal(height) if height is not None else None,
        country=country,
        passport_number=passport_number,
        deleted=deleted,
    )


class PostgresPersonRepository:
    """
    Implements PersonRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, hook: PersonValidationHook) -> None:
        """
        Initialize repository with connection pool and validation hook.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            hook: Checks run before each insert, update and delete
        """
        self._pool = pool
        self._hook = hook

    def list_active(self) -> list[PersonRecord]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM persons
            WHERE deleted_at IS NULL
            ORDER BY created_at, id
        """
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql)
            return [_row_to_record(row) for row in cursor.fetchall()]

    def list_by_country(self, country: CountryCode) -> list[PersonRecord]:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            return self._fetch_by_country(cursor, country)

    def get(self, person_id: UUID) -> PersonRecord | None:
        sql = f"""
            SELECT {_COLUMNS}
            FROM persons
            WHERE id = %s AND deleted_at IS NULL
        """
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (person_id,))
            row = cursor.fetchone()
        return _row_to_record(row) if row is not None else None

    def add(self, draft: PersonDraft) -> PersonRecord:
        """
        Insert a person after the validation hook accepts it.

        Args:
            draft: Attributes of the new person

        Returns:
            The stored record with its generated UUID

        Raises:
            ValidationError: If the hook rejects the insert
            PassportNotUnique: If the unique index rejects the insert
        """
        sql = f"""
            INSERT INTO persons (id, name, email, height, country, passport_number, created_at)
            VALUES (%s, %s, %s, %s, %s, %s, NOW())
            RETURNING {_COLUMNS}
        """
        person_id = uuid4()

        with self._pool.connection() as conn, conn.cursor() as cursor:
            self._lock_passport(cursor, draft.country, draft.passport_number)
            existing = self._fetch_by_country(cursor, draft.country)
            self._hook.before_insert(draft, existing)

            try:
                cursor.execute(
                    sql,
                    (
                        person_id,
                        draft.name,
                        draft.email,
                        draft.height,
                        draft.country.value,
                        draft.passport_number,
                    ),
                )
            except UniqueViolation as e:
                raise PassportNotUnique(
                    "Passport and country code combination isn't unique: "
                    f"{draft.country.name}/{draft.passport_number}"
                ) from e

            row = cursor.fetchone()
            conn.commit()
            return _row_to_record(row)

    def update(self, person_id: UUID, draft: PersonDraft) -> PersonRecord:
        """
        Replace a person's attributes after the validation hook accepts them.

        The target row is locked with SELECT FOR UPDATE so a concurrent
        delete cannot interleave.

        Raises:
            PersonNotFound: If no active person has this id
            ValidationError: If the hook or the unique index rejects the update
        """
        select_sql = """
            SELECT 1 FROM persons
            WHERE id = %s AND deleted_at IS NULL
            FOR UPDATE
        """
        update_sql = f"""
            UPDATE persons
            SET name = %s, email = %s, height = %s, country = %s, passport_number = %s
            WHERE id = %s AND deleted_at IS NULL
            RETURNING {_COLUMNS}
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            self._lock_passport(cursor, draft.country, draft.passport_number)

            cursor.execute(select_sql, (person_id,))
            if cursor.fetchone() is None:
                raise PersonNotFound(f"Person {person_id} not found")

            existing = self._fetch_by_country(cursor, draft.country)
            self._hook.before_update(person_id, draft, existing)

            try:
                cursor.execute(
                    update_sql,
                    (
                        draft.name,
                        draft.email,
                        draft.height,
                        draft.country.value,
                        draft.passport_number,
                        person_id,
                    ),
                )
            except UniqueViolation as e:
                raise PassportNotUnique(
                    "Passport and country code combination isn't unique: "
                    f"{draft.country.name}/{draft.passport_number}"
                ) from e

            row = cursor.fetchone()
            conn.commit()
            return _row_to_record(row)

    def delete(self, person_id: UUID) -> None:
        """
        Soft-delete a person by setting deleted_at.

        Raises:
            PersonNotFound: If no active person has this id
            ValidationError: If the delete-time hook check rejects the delete
        """
        select_sql = f"""
            SELECT {_COLUMNS}
            FROM persons
            WHERE id = %s AND deleted_at IS NULL
            FOR UPDATE
        """
        delete_sql = """
            UPDATE persons
            SET deleted_at = NOW()
            WHERE id = %s AND deleted_at IS NULL
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(select_sql, (person_id,))
            row = cursor.fetchone()
            if row is None:
                raise PersonNotFound(f"Person {person_id} not found")

            record = _row_to_record(row)
            existing = (
                self._fetch_by_country(cursor, record.country)
                if record.country is not None
                else []
            )
            self._hook.before_delete(record, existing)

            cursor.execute(delete_sql, (person_id,))
            conn.commit()

    def _lock_passport(self, cursor: Cursor, country: CountryCode, passport_number: str) -> None:
        """Take a transaction-scoped advisory lock on the normalized pair."""
        key = f"{country.value}:{normalize_passport_number(passport_number)}"
        cursor.execute("SELECT pg_advisory_xact_lock(hashtext(%s))", (key,))

    def _fetch_by_country(self, cursor: Cursor, country: CountryCode) -> list[PersonRecord]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM persons
            WHERE country = %s AND deleted_at IS NULL
            ORDER BY created_at, id
        """
        cursor.execute(sql, (country.value,))
        return [_row_to_record(row) for row in cursor.fetchall()]


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
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
