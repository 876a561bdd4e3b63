"""Task query engine: filters and dynamic sorting over stored tasks."""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from ..models.task import Category, Priority, Task
from ..sorting import SortField, SortOrder, parse_sort_orders, sort_tasks
from ..store.ports import TaskRepository
from .person_service import PersonService
from .validation import to_naive

logger = logging.getLogger(__name__)


class TaskQueryService:
    """Read-only task queries.

    Queries scoped to a person check the person exists first, so an unknown
    person is an error while a known person without tasks gives an empty list.
    """

    def __init__(self, tasks: TaskRepository, person_service: PersonService):
        self._tasks = tasks
        self._persons = person_service

    def by_person(self, person_id: int) -> List[Task]:
        """All tasks owned by a person.

        Raises:
            PersonNotFoundError: If the person does not exist
        """
        self._persons.get(person_id)
        tasks = self._tasks.find_by_person_id(person_id)
        logger.debug(f"Found {len(tasks)} tasks for person {person_id}")
        return tasks

    def by_due_date(self, due_date: datetime) -> List[Task]:
        return self._tasks.find_by_due_date(to_naive(due_date))

    def by_due_date_range(self, start: datetime, end: datetime) -> List[Task]:
        """Tasks due between ``start`` and ``end``, both ends included."""
        tasks = self._tasks.find_by_due_date_between(to_naive(start), to_naive(end))
        logger.debug(f"Found {len(tasks)} tasks due between {start} and {end}")
        return tasks

    def by_person_and_date_range(self, person_id: int, start: datetime, end: datetime) -> List[Task]:
        """Tasks of one person due between ``start`` and ``end``, both ends included.

        Raises:
            PersonNotFoundError: If the person does not exist
        """
        self._persons.get(person_id)
        return self._tasks.find_by_person_id_and_due_date_between(person_id, to_naive(start), to_naive(end))

    def by_category(self, category: Category) -> List[Task]:
        return self._tasks.find_by_category(category)

    def by_priority(self, priority: Priority) -> List[Task]:
        return self._tasks.find_by_priority(priority)

    def sort_by_field(self, field: SortField, ascending: bool = True) -> List[Task]:
        """All tasks ordered by one field. Priority orders LOW < MEDIUM < HIGH."""
        return self._tasks.find_all(sort=[SortOrder(field, ascending)])

    def sort_by_due_date_and_priority(self, due_ascending: bool = True, priority_ascending: bool = True) -> List[Task]:
        """All tasks ordered by due date, ties broken by priority."""
        return self._tasks.find_all(sort=[
            SortOrder(SortField.DUE_DATE, due_ascending),
            SortOrder(SortField.PRIORITY, priority_ascending),
        ])

    def sort_by_multiple_fields(
        self,
        fields: Optional[Sequence[str]],
        orders: Optional[Sequence[str]] = None,
    ) -> List[Task]:
        """All tasks ordered by a caller-chosen list of fields.

        Args:
            fields: Field names applied in order; unknown names are skipped
            orders: ``"asc"`` or ``"desc"`` per field, ascending when missing

        Returns:
            Sorted tasks; storage order when no usable field is given
        """
        sort = parse_sort_orders(fields, orders)
        skipped = len(fields or []) - len(sort)
        if skipped:
            logger.debug(f"Ignored {skipped} unsupported sort fields in {list(fields)}")
        return sort_tasks(self._tasks.find_all(), sort)
