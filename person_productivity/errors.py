"""Error taxonomy raised by the person and task services.

All of these are caller or data errors: none of them is retryable. The
request layer maps them onto HTTP status codes in ``main.py``.
"""

from typing import Any


class DomainError(Exception):
    """Base class for errors raised by the core services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """A field failed one of its constraints."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """A referenced record does not exist in the store."""

    entity = "Resource"

    def __init__(self, identifier: Any, message: str = None):
        super().__init__(message or f"{self.entity} with ID {identifier} not found.")
        self.identifier = identifier


class PersonNotFoundError(NotFoundError):
    """No person with the given id (or email) exists."""

    entity = "Person"

    @classmethod
    def for_email(cls, email: str) -> "PersonNotFoundError":
        """Build the lookup-by-email variant, which names the email instead of an id."""
        return cls(email, message=f"Person not found with email: {email}")


class TaskNotFoundError(NotFoundError):
    """No task with the given id exists."""

    entity = "Task"


class OwnershipError(DomainError):
    """A task mutation named an owner that is not the task's actual owner."""

    def __init__(self, person_id: int, task_id: int):
        super().__init__(f"Task with ID {task_id} not owned by Person with ID {person_id}")
        self.person_id = person_id
        self.task_id = task_id
