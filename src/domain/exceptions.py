"""
Domain exceptions - Semantic error types for the person registry.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class PersonError(Exception):
    """Base class for person registry domain errors."""

    pass


class ValidationError(PersonError):
    """A person failed a format or uniqueness rule."""

    pass


class PassportFormatInvalid(ValidationError):
    """Passport number is empty or contains characters other than digits and spaces."""

    pass


class PassportNotUnique(ValidationError):
    """Another active person already holds the same passport number and country."""

    pass


class NotFoundError(PersonError):
    """A requested person does not exist or has been deleted."""

    pass


class PersonNotFound(NotFoundError):
    pass


class NoPersonsFound(NotFoundError):
    pass
