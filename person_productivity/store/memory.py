"""In-memory record store.

Both repositories share one :class:`InMemoryDatabase`, so deleting a person
can cascade to that person's tasks under the same lock. Records are copied on
the way in and out: callers only change stored state through ``save``.
"""

import logging
from datetime import datetime
from itertools import count
from threading import Lock
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..models.person import Person
from ..models.task import Category, Priority, Task
from ..pagination import PageRequest
from ..sorting import SortOrder, sort_tasks
from .ports import RecordStoreError

logger = logging.getLogger(__name__)


class InMemoryDatabase:
    """Process-local tables for persons and tasks."""

    def __init__(self):
        self.persons: Dict[int, Person] = {}
        self.tasks: Dict[int, Task] = {}
        self.lock = Lock()  # Thread-safe operations
        self._person_ids = count(1)
        self._task_ids = count(1)
        logger.info("In-memory record store initialized")

    def next_person_id(self) -> int:
        return next(self._person_ids)

    def next_task_id(self) -> int:
        return next(self._task_ids)


class InMemoryPersonRepository:
    """Person table of an :class:`InMemoryDatabase`."""

    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def find_by_id(self, person_id: int) -> Optional[Person]:
        with self._db.lock:
            person = self._db.persons.get(person_id)
            return person.model_copy() if person else None

    def exists_by_id(self, person_id: int) -> bool:
        with self._db.lock:
            return person_id in self._db.persons

    def save(self, person: Person) -> Person:
        with self._db.lock:
            stored = person.model_copy()
            if stored.id is None:
                stored.id = self._db.next_person_id()
            self._db.persons[stored.id] = stored
            return stored.model_copy()

    def delete_by_id(self, person_id: int) -> None:
        with self._db.lock:
            if self._db.persons.pop(person_id, None) is None:
                return
            orphaned = [task_id for task_id, task in self._db.tasks.items() if task.person_id == person_id]
            for task_id in orphaned:
                del self._db.tasks[task_id]
            logger.debug(f"Cascade removed {len(orphaned)} tasks of person {person_id}")

    def delete_all(self) -> None:
        with self._db.lock:
            self._db.persons.clear()
            self._db.tasks.clear()

    def find_all(self) -> List[Person]:
        return self._select(lambda person: True)

    def find_all_paged(self, request: PageRequest) -> Tuple[List[Person], int]:
        persons = self.find_all()
        return request.slice(persons), len(persons)

    def count(self) -> int:
        with self._db.lock:
            return len(self._db.persons)

    def find_by_name(self, name: str) -> List[Person]:
        return self._select(lambda person: person.name == name)

    def find_by_email(self, email: str) -> Optional[Person]:
        matches = self._select(lambda person: person.email == email)
        return matches[0] if matches else None

    def _select(self, predicate: Callable[[Person], bool]) -> List[Person]:
        with self._db.lock:
            return [person.model_copy() for person in self._db.persons.values() if predicate(person)]


class InMemoryTaskRepository:
    """Task table of an :class:`InMemoryDatabase`."""

    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def find_by_id(self, task_id: int) -> Optional[Task]:
        with self._db.lock:
            task = self._db.tasks.get(task_id)
            return task.model_copy() if task else None

    def exists_by_id(self, task_id: int) -> bool:
        with self._db.lock:
            return task_id in self._db.tasks

    def save(self, task: Task) -> Task:
        with self._db.lock:
            if task.person_id not in self._db.persons:
                raise RecordStoreError(f"Task references missing person {task.person_id}")
            stored = task.model_copy()
            if stored.id is None:
                stored.id = self._db.next_task_id()
            self._db.tasks[stored.id] = stored
            return stored.model_copy()

    def delete_by_id(self, task_id: int) -> None:
        with self._db.lock:
            self._db.tasks.pop(task_id, None)

    def delete_all(self) -> None:
        with self._db.lock:
            self._db.tasks.clear()

    def find_all(self, sort: Optional[Sequence[SortOrder]] = None) -> List[Task]:
        tasks = self._select(lambda task: True)
        return sort_tasks(tasks, sort) if sort else tasks

    def find_all_paged(self, request: PageRequest) -> Tuple[List[Task], int]:
        tasks = self.find_all()
        return request.slice(tasks), len(tasks)

    def count(self) -> int:
        with self._db.lock:
            return len(self._db.tasks)

    def find_by_person_id(self, person_id: int) -> List[Task]:
        return self._select(lambda task: task.person_id == person_id)

    def find_by_due_date(self, due_date: datetime) -> List[Task]:
        return self._select(lambda task: task.due_date == due_date)

    def find_by_due_date_between(self, start: datetime, end: datetime) -> List[Task]:
        return self._select(lambda task: task.due_date is not None and start <= task.due_date <= end)

    def find_by_person_id_and_due_date_between(
            self,
            person_id: int,
            start: datetime,
            end: datetime,
    ) -> List[Task]:
        return self._select(
            lambda task: task.person_id == person_id
            and task.due_date is not None
            and start <= task.due_date <= end
        )

    def find_by_category(self, category: Category) -> List[Task]:
        return self._select(lambda task: task.category == category)

    def find_by_priority(self, priority: Priority) -> List[Task]:
        return self._select(lambda task: task.priority == priority)

    def _select(self, predicate: Callable[[Task], bool]) -> List[Task]:
        with self._db.lock:
            return [task.model_copy() for task in self._db.tasks.values() if predicate(task)]


class InMemoryStore:
    """Both repositories over one shared database."""

    def __init__(self, db: Optional[InMemoryDatabase] = None):
        self.db = db or InMemoryDatabase()
        self.persons = InMemoryPersonRepository(self.db)
        self.tasks = InMemoryTaskRepository(self.db)
