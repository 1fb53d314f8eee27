"""
Unit tests for PassportValidationHook.

Tests verify the checks run at each lifecycle point:
- before_insert: format + uniqueness
- before_update: format + uniqueness, excluding the updated person
- before_delete: uniqueness only when enabled
"""

import logging
from uuid import uuid4

import pytest

from src.domain.countries import CountryCode
from src.domain.exceptions import PassportFormatInvalid, PassportNotUnique
from src.domain.ports import PersonDraft, PersonRecord
from src.domain.validation import PassportValidationHook


def make_record(passport_number: str, country: CountryCode = CountryCode.FR) -> PersonRecord:
    return PersonRecord(id=uuid4(), name="Jean", country=country, passport_number=passport_number)


def make_draft(passport_number: str, country: CountryCode = CountryCode.FR) -> PersonDraft:
    return PersonDraft(name="Marie", country=country, passport_number=passport_number)


class TestBeforeInsert:
    """Tests for before_insert."""

    def test_accepts_unique_valid_passport(self) -> None:
        hook = PassportValidationHook()
        hook.before_insert(make_draft("1245768007"), [make_record("999")])

    def test_rejects_malformed_passport(self) -> None:
        hook = PassportValidationHook()
        with pytest.raises(PassportFormatInvalid):
            hook.before_insert(make_draft("12AB"), [])

    def test_rejects_collision(self) -> None:
        hook = PassportValidationHook()
        with pytest.raises(PassportNotUnique):
            hook.before_insert(make_draft("12 45 768007"), [make_record("1245768007")])

    def test_rejection_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        hook = PassportValidationHook()
        with caplog.at_level(logging.WARNING), pytest.raises(PassportNotUnique):
            hook.before_insert(make_draft("1245768007"), [make_record("1245768007")])
        assert "Rejected person insert" in caplog.text


class TestBeforeUpdate:
    """Tests for before_update."""

    def test_person_does_not_collide_with_itself(self) -> None:
        hook = PassportValidationHook()
        record = make_record("1245768007")
        hook.before_update(record.id, make_draft("1245 768007"), [record])

    def test_rejects_collision_with_other_person(self) -> None:
        hook = PassportValidationHook()
        record = make_record("1245768007")
        other = make_record("555")
        with pytest.raises(PassportNotUnique):
            hook.before_update(record.id, make_draft("5 5 5"), [record, other])

    def test_rejects_malformed_passport(self) -> None:
        hook = PassportValidationHook()
        record = make_record("1245768007")
        with pytest.raises(PassportFormatInvalid):
            hook.before_update(record.id, make_draft(""), [record])


class TestBeforeDelete:
    """Tests for before_delete."""

    def test_disabled_by_default(self) -> None:
        """With the check off, even an ambiguous pair may be deleted."""
        hook = PassportValidationHook()
        record = make_record("1245768007")
        duplicate = make_record("1245768007")
        hook.before_delete(record, [record, duplicate])

    def test_enabled_accepts_unique_record(self) -> None:
        hook = PassportValidationHook(check_on_delete=True)
        record = make_record("1245768007")
        hook.before_delete(record, [record, make_record("42")])

    def test_enabled_rejects_ambiguous_record(self) -> None:
        hook = PassportValidationHook(check_on_delete=True)
        record = make_record("1245768007")
        duplicate = make_record("12 45 768007")
        with pytest.raises(PassportNotUnique):
            hook.before_delete(record, [record, duplicate])

    def test_enabled_skips_format_check(self) -> None:
        """Legacy rows with malformed numbers can still be deleted."""
        hook = PassportValidationHook(check_on_delete=True)
        record = make_record("AB-123")
        hook.before_delete(record, [record])
