"""Person management CRUD routes."""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from ..deps import get_page_request, get_person_service
from ..models.person import Person
from ..pagination import Page, PageRequest
from ..schemas import MessageResponse, PersonCreate, PersonResponse, PersonUpdate
from ..services.person_service import PersonService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/persons", tags=["persons"])

PersonServiceDep = Annotated[PersonService, Depends(get_person_service)]


def to_response(person: Person) -> PersonResponse:
    return PersonResponse(id=person.id, name=person.name, email=person.email)


@router.post("", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
async def create_person(person_data: PersonCreate, person_service: PersonServiceDep) -> PersonResponse:
    """Create a new person.

    Args:
        person_data: Person creation data
        person_service: Person service instance

    Returns:
        Created person response
    """
    logger.info(f"Creating new person: {person_data.name}")
    return to_response(person_service.create_from_schema(person_data))


@router.get("", response_model=Page[PersonResponse])
async def list_persons(
    person_service: PersonServiceDep,
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[PersonResponse]:
    """List persons one page at a time."""
    return person_service.list(page_request).map(to_response)


@router.delete("", response_model=MessageResponse)
async def delete_all_persons(person_service: PersonServiceDep) -> MessageResponse:
    """Delete every person and every task."""
    person_service.delete_all()
    return MessageResponse(message="All persons deleted successfully.")


@router.get("/name/{name}", response_model=List[PersonResponse])
async def find_persons_by_name(name: str, person_service: PersonServiceDep) -> List[PersonResponse]:
    """Find persons by exact name; an empty list when nobody matches."""
    return [to_response(person) for person in person_service.find_by_name(name)]


@router.get("/email/{email}", response_model=PersonResponse)
async def find_person_by_email(email: str, person_service: PersonServiceDep) -> PersonResponse:
    """Find the person with the given email."""
    return to_response(person_service.find_by_email(email))


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(person_id: int, person_service: PersonServiceDep) -> PersonResponse:
    """Get a specific person by ID."""
    logger.debug(f"Getting person: {person_id}")
    return to_response(person_service.get(person_id))


@router.patch("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: int,
    person_data: PersonUpdate,
    person_service: PersonServiceDep,
) -> PersonResponse:
    """Update the supplied fields of a person.

    Args:
        person_id: Person ID
        person_data: Partial person data
        person_service: Person service instance

    Returns:
        Updated person response
    """
    logger.info(f"Updating person: {person_id}")
    return to_response(person_service.update(person_id, person_data))


@router.delete("/{person_id}", response_model=MessageResponse)
async def delete_person(person_id: int, person_service: PersonServiceDep) -> MessageResponse:
    """Delete a person and all of their tasks."""
    logger.info(f"Deleting person: {person_id}")
    person_service.delete(person_id)
    return MessageResponse(message="Person deleted successfully.")
