"""
Passport number rules - format check and uniqueness check.

Format: after trimming, a passport number must be non-empty and contain only
decimal digits and whitespace. The same rule applies to every country.

Uniqueness: two persons collide when they share a country and the same
passport number once all whitespace is removed, so "12 45 768007",
"1245 768007" and "1245768007" are the same passport for this purpose.
Soft-deleted persons never collide.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from .countries import CountryCode
from .exceptions import PassportFormatInvalid, PassportNotUnique
from .ports import PersonRecord

MAX_PASSPORT_NUMBER_LENGTH = 15

_PASSPORT_FORMAT = re.compile(r"[\d\s]+", re.ASCII)

# Only ASCII whitespace is trimmed; U+00A0 and other Unicode spaces stay and fail the match.
_ASCII_WHITESPACE = " \t\n\r\f\v"


@dataclass(frozen=True)
class PassportCandidate:
    """
    A passport number/country pair to check against existing records.

    exclude_id is the id of the person being updated or deleted, so that the
    person is not compared with itself. It is None for inserts.
    """

    passport_number: str
    country: CountryCode | None
    exclude_id: UUID | None = None


def is_valid_format(passport_number: str) -> bool:
    trimmed = passport_number.strip(_ASCII_WHITESPACE)
    return bool(trimmed) and _PASSPORT_FORMAT.fullmatch(trimmed) is not None


def normalize_passport_number(passport_number: str) -> str:
    """Remove every whitespace character. Only used for comparison."""
    return "".join(passport_number.split())


def collides(candidate: PassportCandidate, record: PersonRecord) -> bool:
    """Whether record is another active person holding the candidate's passport."""
    if record.deleted:
        return False
    if candidate.exclude_id is not None and record.id == candidate.exclude_id:
        return False
    return record.country == candidate.country and normalize_passport_number(
        record.passport_number
    ) == normalize_passport_number(candidate.passport_number)


def is_unique(candidate: PassportCandidate, existing_records: Iterable[PersonRecord]) -> bool:
    return not any(collides(candidate, record) for record in existing_records)


def validate_format(passport_number: str) -> None:
    """
    Raise if passport_number fails the format rule.

    Raises:
        PassportFormatInvalid: If the trimmed value is empty, contains
            anything but digits and spaces, or is longer than
            MAX_PASSPORT_NUMBER_LENGTH
    """
    if not is_valid_format(passport_number):
        raise PassportFormatInvalid(
            f"Passport number is not valid: {passport_number!r} "
            "(expected digits and spaces only)"
        )
    if len(passport_number) > MAX_PASSPORT_NUMBER_LENGTH:
        raise PassportFormatInvalid(
            f"Passport number is not valid: {passport_number!r} "
            f"(at most {MAX_PASSPORT_NUMBER_LENGTH} characters)"
        )


def validate_uniqueness(
    candidate: PassportCandidate, existing_records: Iterable[PersonRecord]
) -> None:
    """
    Raise if another active record holds the candidate's passport and country.

    Raises:
        PassportNotUnique: Naming the offending country/passport pair
    """
    if not is_unique(candidate, existing_records):
        country = candidate.country.name if candidate.country is not None else "unknown"
        raise PassportNotUnique(
            "Passport and country code combination isn't unique: "
            f"{country}/{candidate.passport_number}"
        )
