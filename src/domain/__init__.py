"""
Domain layer - Pure business logic with zero framework imports.

This package contains the passport validation core and the person service.
It defines its own port interfaces for infrastructure abstraction, ensuring
true hexagonal architecture decoupling.
"""

from .countries import CountryCode, from_id, from_symbol, to_id
from .exceptions import (
    NoPersonsFound,
    NotFoundError,
    PassportFormatInvalid,
    PassportNotUnique,
    PersonError,
    PersonNotFound,
    ValidationError,
)
from .passport import (
    PassportCandidate,
    is_unique,
    is_valid_format,
    normalize_passport_number,
    validate_format,
    validate_uniqueness,
)
from .persons import PersonService
from .ports import PersonDraft, PersonRecord, PersonRepository, PersonValidationHook
from .validation import PassportValidationHook

__all__ = [
    "CountryCode",
    "NoPersonsFound",
    "NotFoundError",
    "PassportCandidate",
    "PassportFormatInvalid",
    "PassportNotUnique",
    "PassportValidationHook",
    "PersonDraft",
    "PersonError",
    "PersonNotFound",
    "PersonRecord",
    "PersonRepository",
    "PersonService",
    "PersonValidationHook",
    "ValidationError",
    "from_id",
    "from_symbol",
    "is_unique",
    "is_valid_format",
    "normalize_passport_number",
    "to_id",
    "validate_format",
    "validate_uniqueness",
]
