"""
In-memory repository adapter - Implements PersonRepository protocol.

Keeps persons in a dict for development and tests. Soft-deleted records stay
in the store with deleted=True. A single lock serializes every check-then-write
sequence, and an index keyed by (country, normalized passport number) over
active records plays the role of the database's unique index.
"""

import logging
import threading
from dataclasses import replace
from uuid import UUID, uuid4

from src.domain.countries import CountryCode
from src.domain.exceptions import PassportNotUnique, PersonNotFound
from src.domain.passport import normalize_passport_number
from src.domain.ports import PersonDraft, PersonRecord, PersonValidationHook

logger = logging.getLogger(__name__)


def _index_key(country: CountryCode | None, passport_number: str) -> tuple[CountryCode | None, str]:
    return country, normalize_passport_number(passport_number)


class InMemoryPersonRepository:
    """
    Implements PersonRepository protocol with process-local storage.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, hook: PersonValidationHook) -> None:
        self._hook = hook
        self._lock = threading.Lock()
        self._records: dict[UUID, PersonRecord] = {}
        self._active_keys: dict[tuple[CountryCode | None, str], UUID] = {}

    def list_active(self) -> list[PersonRecord]:
        with self._lock:
            return [r for r in self._records.values() if not r.deleted]

    def list_by_country(self, country: CountryCode) -> list[PersonRecord]:
        with self._lock:
            return [r for r in self._records.values() if not r.deleted and r.country == country]

    def get(self, person_id: UUID) -> PersonRecord | None:
        with self._lock:
            record = self._records.get(person_id)
        if record is None or record.deleted:
            return None
        return record

    def add(self, draft: PersonDraft) -> PersonRecord:
        with self._lock:
            # Deleted records are passed through; the hook must ignore them.
            existing = self._records_for(draft.country)
            self._hook.before_insert(draft, existing)

            key = _index_key(draft.country, draft.passport_number)
            self._claim_key(key, draft)

            record = PersonRecord(
                id=uuid4(),
                name=draft.name,
                email=draft.email,
                height=draft.height,
                country=draft.country,
                passport_number=draft.passport_number,
            )
            self._records[record.id] = record
            self._active_keys[key] = record.id
            return record

    def update(self, person_id: UUID, draft: PersonDraft) -> PersonRecord:
        with self._lock:
            current = self._records.get(person_id)
            if current is None or current.deleted:
                raise PersonNotFound(f"Person {person_id} not found")

            existing = self._records_for(draft.country)
            self._hook.before_update(person_id, draft, existing)

            old_key = _index_key(current.country, current.passport_number)
            new_key = _index_key(draft.country, draft.passport_number)
            if new_key != old_key:
                self._claim_key(new_key, draft)

            record = replace(
                current,
                name=draft.name,
                email=draft.email,
                height=draft.height,
                country=draft.country,
                passport_number=draft.passport_number,
            )
            self._records[person_id] = record
            if new_key != old_key:
                del self._active_keys[old_key]
                self._active_keys[new_key] = person_id
            return record

    def delete(self, person_id: UUID) -> None:
        with self._lock:
            current = self._records.get(person_id)
            if current is None or current.deleted:
                raise PersonNotFound(f"Person {person_id} not found")

            self._hook.before_delete(current, self._records_for(current.country))

            self._records[person_id] = replace(current, deleted=True)
            self._active_keys.pop(_index_key(current.country, current.passport_number), None)

    def _records_for(self, country: CountryCode | None) -> list[PersonRecord]:
        return [r for r in self._records.values() if r.country == country]

    def _claim_key(self, key: tuple[CountryCode | None, str], draft: PersonDraft) -> None:
        if key in self._active_keys:
            logger.warning("Unique index rejected %s/%s", draft.country.name, draft.passport_number)
            raise PassportNotUnique(
                "Passport and country code combination isn't unique: "
                f"{draft.country.name}/{draft.passport_number}"
            )
