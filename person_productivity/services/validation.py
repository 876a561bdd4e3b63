"""Field constraints shared by the person and task services."""

from datetime import datetime, timezone
from typing import Optional

from email_validator import EmailNotValidError, validate_email as check_email

from ..errors import ValidationError

NAME_MAX_LENGTH = 255
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def validate_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("name", "Name must not be blank")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError("name", f"Name cannot be longer than {NAME_MAX_LENGTH} characters")
    return name


def validate_email(email: Optional[str]) -> str:
    if email is None or not email.strip():
        raise ValidationError("email", "Email must not be blank")
    try:
        check_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("email", f"Invalid email address: {e}") from e
    return email


def validate_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValidationError("title", "Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError("title", f"Title cannot be longer than {TITLE_MAX_LENGTH} characters")
    return title


def validate_description(description: Optional[str]) -> Optional[str]:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            "description", f"Description cannot be longer than {DESCRIPTION_MAX_LENGTH} characters"
        )
    return description


def validate_due_date(due_date: Optional[datetime], now: datetime) -> Optional[datetime]:
    """Reject due dates whose calendar day is already past. Aware values come back as naive UTC."""
    due_date = to_naive(due_date)
    if due_date is not None and due_date.date() < now.date():
        raise ValidationError("dueDate", "Due date must be today or in the future")
    return due_date


def to_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an offset-aware datetime to naive UTC; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
