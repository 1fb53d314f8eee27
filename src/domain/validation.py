"""
Person validation hook - Checks wired into repository writes.

Repositories call the hook synchronously inside the transaction that applies
an insert, update or delete, passing the active records they loaded for the
person's country. Raising aborts the write.

Lifecycle points:
- before_insert: format check, then uniqueness against all active records
- before_update: format check, then uniqueness excluding the updated person
- before_delete: uniqueness excluding the deleted person, only when
  check_on_delete is enabled (off by default)
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from .exceptions import ValidationError
from .passport import PassportCandidate, validate_format, validate_uniqueness
from .ports import PersonDraft, PersonRecord

logger = logging.getLogger(__name__)


@dataclass
class PassportValidationHook:
    """
    Implements PersonValidationHook protocol with the passport rules.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    check_on_delete: bool = False

    def before_insert(self, draft: PersonDraft, existing: Sequence[PersonRecord]) -> None:
        candidate = PassportCandidate(draft.passport_number, draft.country)
        self._check("insert", candidate, existing, check_format=True)

    def before_update(
        self, person_id: UUID, draft: PersonDraft, existing: Sequence[PersonRecord]
    ) -> None:
        candidate = PassportCandidate(draft.passport_number, draft.country, exclude_id=person_id)
        self._check("update", candidate, existing, check_format=True)

    def before_delete(self, record: PersonRecord, existing: Sequence[PersonRecord]) -> None:
        if not self.check_on_delete:
            return
        candidate = PassportCandidate(record.passport_number, record.country, exclude_id=record.id)
        self._check("delete", candidate, existing, check_format=False)

    def _check(
        self,
        operation: str,
        candidate: PassportCandidate,
        existing: Sequence[PersonRecord],
        check_format: bool,
    ) -> None:
        try:
            if check_format:
                validate_format(candidate.passport_number)
            validate_uniqueness(candidate, existing)
        except ValidationError as e:
            logger.warning("Rejected person %s: %s", operation, e)
            raise
