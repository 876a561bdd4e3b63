"""Merge updates: only fields supplied (non-``None``) in a patch overwrite stored values."""

from datetime import datetime

from ..models.person import Person
from ..models.task import Task
from ..schemas import PersonUpdate, TaskUpdate
from .validation import to_naive, validate_description, validate_email, validate_name, validate_title


def merge_person(existing: Person, update: PersonUpdate) -> Person:
    """Return a copy of ``existing`` with the supplied fields of ``update`` applied."""
    merged = existing.model_copy()

    if update.name is not None:
        merged.name = validate_name(update.name)

    if update.email is not None:
        merged.email = validate_email(update.email)

    return merged


def merge_task(existing: Task, update: TaskUpdate, now: datetime) -> Task:
    """Return a copy of ``existing`` with the supplied fields of ``update`` applied.

    Owner and creation time are never taken from the patch, and the due date is
    not re-checked against the current day. A ``finished`` flag goes through
    the same transition as finishing or unfinishing the task.
    """
    merged = existing.model_copy()

    if update.title is not None:
        merged.title = validate_title(update.title)

    if update.description is not None:
        merged.description = validate_description(update.description)

    if update.due_date is not None:
        merged.due_date = to_naive(update.due_date)

    if update.priority is not None:
        merged.priority = update.priority

    if update.category is not None:
        merged.category = update.category

    if update.finished is True:
        merged.mark_finished(now)
    elif update.finished is False:
        merged.mark_unfinished()

    return merged
