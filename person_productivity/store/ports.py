"""Record store ports used by the services.

The services depend on these Protocols instead of a concrete backend, which
keeps the storage swappable and lets tests run against the in-memory store.
"""

from datetime import datetime
from typing import List, Optional, Protocol, Sequence, Tuple

from ..models.person import Person
from ..models.task import Category, Priority, Task
from ..pagination import PageRequest
from ..sorting import SortOrder


class RecordStoreError(Exception):
    """Infrastructure failure inside the record store (constraint violation, backend fault)."""


class PersonRepository(Protocol):
    def find_by_id(self, person_id: int) -> Optional[Person]: ...
    def exists_by_id(self, person_id: int) -> bool: ...
    def save(self, person: Person) -> Person: ...
    def delete_by_id(self, person_id: int) -> None: ...
    def delete_all(self) -> None: ...
    def find_all(self) -> List[Person]: ...
    def find_all_paged(self, request: PageRequest) -> Tuple[List[Person], int]: ...
    def count(self) -> int: ...

    # Predicate queries
    def find_by_name(self, name: str) -> List[Person]: ...
    def find_by_email(self, email: str) -> Optional[Person]: ...


class TaskRepository(Protocol):
    def find_by_id(self, task_id: int) -> Optional[Task]: ...
    def exists_by_id(self, task_id: int) -> bool: ...
    def save(self, task: Task) -> Task: ...
    def delete_by_id(self, task_id: int) -> None: ...
    def delete_all(self) -> None: ...
    def find_all(self, sort: Optional[Sequence[SortOrder]] = None) -> List[Task]: ...
    def find_all_paged(self, request: PageRequest) -> Tuple[List[Task], int]: ...
    def count(self) -> int: ...

    # Predicate queries
    def find_by_person_id(self, person_id: int) -> List[Task]: ...
    def find_by_due_date(self, due_date: datetime) -> List[Task]: ...
    def find_by_due_date_between(self, start: datetime, end: datetime) -> List[Task]: ...
    def find_by_person_id_and_due_date_between(
            self,
            person_id: int,
            start: datetime,
            end: datetime,
    ) -> List[Task]: ...
    def find_by_category(self, category: Category) -> List[Task]: ...
    def find_by_priority(self, priority: Priority) -> List[Task]: ...
