"""Person service for CRUD operations and lookups."""

import logging
from typing import List

from ..errors import PersonNotFoundError
from ..models.person import Person
from ..pagination import Page, PageRequest
from ..schemas import PersonCreate, PersonUpdate
from ..store.ports import PersonRepository
from .merge import merge_person
from .validation import validate_email, validate_name

logger = logging.getLogger(__name__)


class PersonService:
    """Service for the person lifecycle, backed by a person repository."""

    def __init__(self, persons: PersonRepository):
        """Initialize the person service.

        Args:
            persons: Repository holding person records
        """
        self._persons = persons
        logger.info("Person service initialized")

    def create(self, name: str, email: str) -> Person:
        """Create a new person.

        Args:
            name: Full name, not blank, at most 255 characters
            email: Email address with valid syntax

        Returns:
            Created person with a store-assigned id

        Raises:
            ValidationError: If name or email is invalid
        """
        person = Person(name=validate_name(name), email=validate_email(email))
        person = self._persons.save(person)

        logger.info(f"Created person {person.id}: {person.name}")
        return person

    def create_from_schema(self, person_data: PersonCreate) -> Person:
        """Create a new person from schema."""
        return self.create(name=person_data.name, email=person_data.email)

    def get(self, person_id: int) -> Person:
        """Get a person by ID.

        Raises:
            PersonNotFoundError: If no person has this ID
        """
        person = self._persons.find_by_id(person_id)
        if person is None:
            logger.warning(f"Person {person_id} not found")
            raise PersonNotFoundError(person_id)

        logger.debug(f"Retrieved person {person_id}: {person.name}")
        return person

    def update(self, person_id: int, person_data: PersonUpdate) -> Person:
        """Update a person, leaving fields that are ``None`` in the patch untouched.

        Args:
            person_id: Person ID
            person_data: Partial person data

        Returns:
            Updated person

        Raises:
            PersonNotFoundError: If no person has this ID
            ValidationError: If a supplied field is invalid
        """
        existing = self.get(person_id)
        person = self._persons.save(merge_person(existing, person_data))

        logger.info(f"Updated person {person_id}: {person.name}")
        return person

    def delete(self, person_id: int) -> None:
        """Delete a person together with every task they own.

        Raises:
            PersonNotFoundError: If no person has this ID
        """
        if not self._persons.exists_by_id(person_id):
            logger.warning(f"Person {person_id} not found for deletion")
            raise PersonNotFoundError(person_id)

        self._persons.delete_by_id(person_id)
        logger.info(f"Deleted person {person_id}")

    def delete_all(self) -> None:
        """Delete every person, and with them every task."""
        self._persons.delete_all()
        logger.warning("Deleted all persons")

    def list(self, request: PageRequest) -> Page[Person]:
        """Return one page of persons in storage order."""
        persons, total = self._persons.find_all_paged(request)
        logger.debug(f"Listed page {request.page} of persons ({len(persons)} of {total})")
        return Page.of(persons, request, total)

    def list_all(self) -> List[Person]:
        return self._persons.find_all()

    def find_by_name(self, name: str) -> List[Person]:
        """Find persons whose name matches exactly. No match gives an empty list."""
        persons = self._persons.find_by_name(name)
        logger.debug(f"Found {len(persons)} persons named {name!r}")
        return persons

    def find_by_email(self, email: str) -> Person:
        """Find the person with this email.

        Raises:
            PersonNotFoundError: If no person has this email
        """
        person = self._persons.find_by_email(email)
        if person is None:
            logger.warning(f"No person with email {email}")
            raise PersonNotFoundError.for_email(email)
        return person
