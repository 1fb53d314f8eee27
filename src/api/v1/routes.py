"""
API v1 routes.

Defines REST endpoints for the person registry API.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import get_person_service
from src.api.models import CountryResponse, ErrorResponse, PersonRequest, PersonResponse
from src.domain.countries import CountryCode
from src.domain.exceptions import (
    NotFoundError,
    PassportFormatInvalid,
    PassportNotUnique,
    PersonError,
)
from src.domain.persons import PersonService

router = APIRouter(tags=["v1"])


def _to_http_error(error: PersonError) -> HTTPException:
    """Map a domain error to its HTTP status."""
    if isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, PassportNotUnique):
        code = status.HTTP_409_CONFLICT
    elif isinstance(error, PassportFormatInvalid):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(error))


@router.get(
    "/persons",
    response_model=list[PersonResponse],
    responses={404: {"model": ErrorResponse, "description": "No persons registered"}},
    summary="List persons",
    description="Return every person that has not been deleted.",
)
async def list_persons(
    service: PersonService = Depends(get_person_service),
) -> list[PersonResponse]:
    try:
        persons = service.list_persons()
    except PersonError as e:
        raise _to_http_error(e) from None
    return [PersonResponse.from_record(person) for person in persons]


@router.post(
    "/persons",
    response_model=PersonResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Passport and country already registered"},
        422: {"description": "Validation error"},
    },
    summary="Add a person",
    description="Register a person. The passport number must contain only digits "
    "and spaces, and must be unique per country once spaces are ignored.",
)
async def add_person(
    request_data: PersonRequest,
    service: PersonService = Depends(get_person_service),
) -> PersonResponse:
    """
    Add a new person.

    - **name**: Capitalized name, 2-255 characters
    - **country**: Country abbreviation such as "FR"
    - **passport_number**: Digits and spaces, at most 15 characters
    - **email**: Optional email address
    - **height**: Optional height in centimeters (0-300)
    """
    try:
        person = service.add_person(
            name=request_data.name,
            country=request_data.country,
            passport_number=request_data.passport_number,
            email=request_data.email,
            height=request_data.height,
        )
    except PersonError as e:
        raise _to_http_error(e) from None
    return PersonResponse.from_record(person)


@router.get(
    "/persons/{person_id}",
    response_model=PersonResponse,
    responses={404: {"model": ErrorResponse, "description": "Person not found"}},
    summary="Get a person",
)
async def get_person(
    person_id: UUID,
    service: PersonService = Depends(get_person_service),
) -> PersonResponse:
    try:
        person = service.get_person(person_id)
    except PersonError as e:
        raise _to_http_error(e) from None
    return PersonResponse.from_record(person)


@router.put(
    "/persons/{person_id}",
    response_model=PersonResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Person not found"},
        409: {"model": ErrorResponse, "description": "Passport and country already registered"},
        422: {"description": "Validation error"},
    },
    summary="Replace a person",
)
async def update_person(
    person_id: UUID,
    request_data: PersonRequest,
    service: PersonService = Depends(get_person_service),
) -> PersonResponse:
    try:
        person = service.update_person(
            person_id,
            name=request_data.name,
            country=request_data.country,
            passport_number=request_data.passport_number,
            email=request_data.email,
            height=request_data.height,
        )
    except PersonError as e:
        raise _to_http_error(e) from None
    return PersonResponse.from_record(person)


@router.delete(
    "/persons/{person_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Person not found"},
        409: {"model": ErrorResponse, "description": "Delete rejected by uniqueness check"},
    },
    summary="Delete a person",
    description="Soft-delete a person. Its passport number becomes available again.",
)
async def delete_person(
    person_id: UUID,
    service: PersonService = Depends(get_person_service),
) -> Response:
    try:
        service.delete_person(person_id)
    except PersonError as e:
        raise _to_http_error(e) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/countries",
    response_model=list[CountryResponse],
    summary="List country codes",
)
async def list_countries() -> list[CountryResponse]:
    return [CountryResponse(code=country.name, id=country.value) for country in CountryCode]
