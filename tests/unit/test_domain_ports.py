"""
Unit tests for domain ports and exceptions.

Tests verify:
- Port interfaces are properly defined
- Exceptions are properly structured
- Domain purity (zero framework imports)
"""

import dataclasses
import subprocess
from uuid import uuid4

import pytest

from src.domain.countries import CountryCode
from src.domain.exceptions import (
    NoPersonsFound,
    NotFoundError,
    PassportFormatInvalid,
    PassportNotUnique,
    PersonError,
    PersonNotFound,
    ValidationError,
)
from src.domain.ports import PersonDraft, PersonRecord, PersonRepository, PersonValidationHook


class TestPersonRecord:
    """Tests for PersonRecord."""

    def test_defaults(self) -> None:
        record = PersonRecord(
            id=uuid4(), name="Anne", country=CountryCode.FR, passport_number="1"
        )
        assert record.email is None
        assert record.height is None
        assert record.deleted is False

    def test_is_immutable(self) -> None:
        record = PersonRecord(
            id=uuid4(), name="Anne", country=CountryCode.FR, passport_number="1"
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.name = "Bernard"  # type: ignore[misc]

    def test_draft_is_immutable(self) -> None:
        draft = PersonDraft(name="Anne", country=CountryCode.FR, passport_number="1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            draft.passport_number = "2"  # type: ignore[misc]


class TestPersonRepositoryProtocol:
    """Tests for PersonRepository protocol."""

    @pytest.mark.parametrize(
        "method", ["list_active", "list_by_country", "get", "add", "update", "delete"]
    )
    def test_repository_defines_method(self, method: str) -> None:
        assert hasattr(PersonRepository, method)


class TestPersonValidationHookProtocol:
    """Tests for PersonValidationHook protocol."""

    @pytest.mark.parametrize("method", ["before_insert", "before_update", "before_delete"])
    def test_hook_defines_method(self, method: str) -> None:
        assert hasattr(PersonValidationHook, method)


class TestDomainExceptions:
    """Tests for domain exceptions."""

    def test_person_error_is_exception(self) -> None:
        assert issubclass(PersonError, Exception)

    @pytest.mark.parametrize("error", [ValidationError, NotFoundError])
    def test_error_kinds_inherit_person_error(self, error: type) -> None:
        assert issubclass(error, PersonError)

    @pytest.mark.parametrize("error", [PassportFormatInvalid, PassportNotUnique])
    def test_passport_errors_are_validation_errors(self, error: type) -> None:
        assert issubclass(error, ValidationError)

    @pytest.mark.parametrize("error", [PersonNotFound, NoPersonsFound])
    def test_missing_errors_are_not_found_errors(self, error: type) -> None:
        assert issubclass(error, NotFoundError)

    def test_validation_error_carries_message(self) -> None:
        with pytest.raises(ValidationError, match="FR/123"):
            raise PassportNotUnique("Passport and country code combination isn't unique: FR/123")


class TestDomainPurity:
    """Tests for domain purity - zero framework imports."""

    @pytest.mark.parametrize(
        "pattern",
        [
            "from fastapi",
            "import fastapi",
            "from pydantic",
            "import pydantic",
            "from psycopg",
            "import psycopg",
        ],
    )
    def test_no_framework_imports_in_domain(self, pattern: str) -> None:
        result = subprocess.run(
            ["grep", "-r", pattern, "src/domain/"],
            capture_output=True,
            text=True,
        )
        assert result.returncode != 0, f"Framework import found: {result.stdout}"
