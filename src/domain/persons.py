"""
Person domain service - list, add, replace and delete persons.

The service checks the passport format up front, at field-validation time,
so malformed input never reaches the repository. Uniqueness is decided by
the repository's validation hook inside the write transaction, where the
records it compares against cannot change underneath it.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from .countries import CountryCode
from .exceptions import NoPersonsFound, PersonNotFound
from .passport import validate_format
from .ports import PersonDraft, PersonRecord, PersonRepository

logger = logging.getLogger(__name__)


@dataclass
class PersonService:
    """
    Domain service for the person registry.

    Orchestrates input checks and persistence through the repository port.
    """

    repository: PersonRepository

    def list_persons(self) -> list[PersonRecord]:
        """
        Return every active person.

        Raises:
            NoPersonsFound: If the registry is empty
        """
        persons = self.repository.list_active()
        if not persons:
            raise NoPersonsFound("There are no persons in the database")
        return persons

    def get_person(self, person_id: UUID) -> PersonRecord:
        person = self.repository.get(person_id)
        if person is None:
            raise PersonNotFound(f"Person {person_id} not found")
        return person

    def add_person(
        self,
        name: str,
        country: CountryCode,
        passport_number: str,
        email: str | None = None,
        height: Decimal | None = None,
    ) -> PersonRecord:
        """
        Add a new person.

        Args:
            name: Person name
            country: Country that issued the passport
            passport_number: Passport number, stored as given
            email: Optional contact email
            height: Optional height in centimeters

        Returns:
            The stored person

        Raises:
            PassportFormatInvalid: If the passport number is malformed
            PassportNotUnique: If another active person holds the same
                passport number and country
        """
        validate_format(passport_number)
        draft = PersonDraft(
            name=name,
            country=country,
            passport_number=passport_number,
            email=email,
            height=height,
        )
        person = self.repository.add(draft)
        logger.info("Person added: %s (%s)", person.id, country.name)
        return person

    def update_person(
        self,
        person_id: UUID,
        name: str,
        country: CountryCode,
        passport_number: str,
        email: str | None = None,
        height: Decimal | None = None,
    ) -> PersonRecord:
        """
        Replace all writable attributes of a person.

        Raises:
            PassportFormatInvalid: If the passport number is malformed
            PersonNotFound: If no active person has this id
            PassportNotUnique: If the new pair is held by another person
        """
        validate_format(passport_number)
        draft = PersonDraft(
            name=name,
            country=country,
            passport_number=passport_number,
            email=email,
            height=height,
        )
        person = self.repository.update(person_id, draft)
        logger.info("Person updated: %s", person.id)
        return person

    def delete_person(self, person_id: UUID) -> None:
        """
        Soft-delete a person, releasing its passport/country pair.

        Raises:
            PersonNotFound: If no active person has this id
        """
        self.repository.delete(person_id)
        logger.info("Person deleted: %s", person_id)
