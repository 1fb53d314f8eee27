"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the person data types and the interfaces (ports) that
the domain requires from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from .countries import CountryCode


@dataclass(frozen=True)
class PersonDraft:
    """Writable attributes of a person, used for insert and full replacement."""

    name: str
    country: CountryCode
    passport_number: str
    email: str | None = None
    height: Decimal | None = None


@dataclass(frozen=True)
class PersonRecord:
    """
    A stored person.

    The id is assigned by the repository. country is None only when the
    stored id no longer maps to a known CountryCode.
    """

    id: UUID
    name: str
    country: CountryCode | None
    passport_number: str
    email: str | None = None
    height: Decimal | None = None
    deleted: bool = False


class PersonValidationHook(Protocol):
    """
    Checks run by a repository inside its transaction, before a write is applied.

    Each method raises ValidationError to abort the mutation.
    """

    def before_insert(self, draft: PersonDraft, existing: Sequence[PersonRecord]) -> None:
        ...

    def before_update(
        self, person_id: UUID, draft: PersonDraft, existing: Sequence[PersonRecord]
    ) -> None:
        ...

    def before_delete(self, record: PersonRecord, existing: Sequence[PersonRecord]) -> None:
        ...


class PersonRepository(Protocol):
    """Port interface for person persistence."""

    def list_active(self) -> list[PersonRecord]:
        """Return all non-deleted persons."""
        ...

    def list_by_country(self, country: CountryCode) -> list[PersonRecord]:
        """Return all non-deleted persons registered under a country."""
        ...

    def get(self, person_id: UUID) -> PersonRecord | None:
        """Return a non-deleted person, or None."""
        ...

    def add(self, draft: PersonDraft) -> PersonRecord:
        """
        Insert a person.

        Args:
            draft: Attributes of the new person

        Returns:
            The stored record with its assigned id

        Raises:
            ValidationError: If the validation hook or the storage
                uniqueness backstop rejects the insert
        """
        ...

    def update(self, person_id: UUID, draft: PersonDraft) -> PersonRecord:
        """
        Replace the attributes of an existing person.

        Raises:
            PersonNotFound: If no active person has this id
            ValidationError: If the update is rejected
        """
        ...

    def delete(self, person_id: UUID) -> None:
        """
        Soft-delete a person.

        Raises:
            PersonNotFound: If no active person has this id
            ValidationError: If the delete-time check rejects the delete
        """
        ...
