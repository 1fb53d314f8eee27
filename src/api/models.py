"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.domain.countries import CountryCode, from_id, from_symbol
from src.domain.passport import MAX_PASSPORT_NUMBER_LENGTH
from src.domain.ports import PersonRecord

NAME_PATTERN = r"^[A-Z][a-z]*(\s(([a-z]{1,3})|(([a-z]+')?[A-Z][a-z]*)))*$"
MAX_EMAIL_LENGTH = 120


class PersonRequest(BaseModel):
    """Request model for adding or replacing a person."""

    name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        pattern=NAME_PATTERN,
        description="Person name, e.g. 'Charles de Gaulle' or 'Jeanne d'Arc'",
    )
    country: CountryCode = Field(
        ...,
        description="Country abbreviation (e.g. 'FR') or its numeric id",
        json_schema_extra={"examples": ["FR"]},
    )
    passport_number: str = Field(
        ...,
        max_length=MAX_PASSPORT_NUMBER_LENGTH,
        description="Digits and spaces; spaces are ignored when checking uniqueness",
    )
    email: EmailStr | None = None
    height: Decimal | None = Field(
        None,
        gt=0,
        le=300,
        max_digits=5,
        decimal_places=2,
        description="Height in centimeters, at most two decimal places",
    )

    @field_validator("email")
    @classmethod
    def email_fits_column(cls, value: str | None) -> str | None:
        if value is not None and len(value) > MAX_EMAIL_LENGTH:
            raise ValueError(f"Email must be at most {MAX_EMAIL_LENGTH} characters")
        return value

    @field_validator("country", mode="before")
    @classmethod
    def parse_country(cls, value: Any) -> Any:
        """Accept the abbreviation as well as the numeric id."""
        if isinstance(value, str):
            country = from_symbol(value) if not value.strip().isdigit() else from_id(int(value))
            if country is None:
                raise ValueError(f"Unknown country code: {value}")
            return country
        return value


class PersonResponse(BaseModel):
    """Response model for a stored person."""

    id: UUID
    name: str
    email: str | None
    height: Decimal | None
    country: str | None
    country_id: int | None
    passport_number: str

    @classmethod
    def from_record(cls, record: PersonRecord) -> "PersonResponse":
        return cls(
            id=record.id,
            name=record.name,
            email=record.email,
            height=record.height,
            country=record.country.name if record.country is not None else None,
            country_id=record.country.value if record.country is not None else None,
            passport_number=record.passport_number,
        )


class CountryResponse(BaseModel):
    """Response model for a country code."""

    code: str
    id: int


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
