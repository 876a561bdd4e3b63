"""Task service for CRUD operations and task lifecycle."""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..errors import TaskNotFoundError
from ..models.task import Task
from ..pagination import Page, PageRequest
from ..schemas import TaskCreate, TaskUpdate
from ..store.ports import TaskRepository
from .merge import merge_task
from .ownership import OwnershipGuard
from .person_service import PersonService
from .validation import to_naive, validate_description, validate_due_date, validate_title

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task CRUD operations.

    Every task is created for an existing person; deletes and owner-scoped
    updates go through the :class:`OwnershipGuard`.
    """

    def __init__(
        self,
        tasks: TaskRepository,
        person_service: PersonService,
        guard: Optional[OwnershipGuard] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the task service.

        Args:
            tasks: Repository holding task records
            person_service: Used to resolve task owners
            guard: Ownership guard, a default one is built if omitted
            clock: Source of the current time
        """
        self._tasks = tasks
        self._persons = person_service
        self._guard = guard or OwnershipGuard()
        self._clock = clock
        logger.info("Task service initialized")

    def create(self, task_data: TaskCreate, person_id: int) -> Task:
        """Create a new task owned by ``person_id``.

        The task always starts unfinished, with no completion date.

        Args:
            task_data: Task creation data
            person_id: ID of the owning person

        Returns:
            Created task

        Raises:
            PersonNotFoundError: If the person does not exist
            ValidationError: If title, description or due date is invalid
        """
        person = self._persons.get(person_id)
        now = self._clock()

        task = Task(
            title=validate_title(task_data.title),
            description=validate_description(task_data.description),
            creation_time=to_naive(task_data.creation_time) or now,
            due_date=validate_due_date(task_data.due_date, now),
            priority=task_data.priority,
            category=task_data.category,
            finished=False,
            completion_date=None,
            person_id=person.id,
        )
        task = self._tasks.save(task)

        logger.info(f"Created task {task.id} for person {person.id}: {task.title}")
        return task

    def get(self, task_id: int) -> Task:
        """Get a task by ID.

        Raises:
            TaskNotFoundError: If no task has this ID
        """
        task = self._tasks.find_by_id(task_id)
        if task is None:
            logger.warning(f"Task {task_id} not found")
            raise TaskNotFoundError(task_id)

        logger.debug(f"Retrieved task {task_id}: {task.title}")
        return task

    def update(self, task_id: int, task_data: TaskUpdate, owner_id: Optional[int] = None) -> Task:
        """Update a task, leaving fields that are ``None`` in the patch untouched.

        Args:
            task_id: Task ID
            task_data: Partial task data
            owner_id: When given, the update is rejected unless this person owns the task

        Returns:
            Updated task

        Raises:
            TaskNotFoundError: If no task has this ID
            OwnershipError: If ``owner_id`` does not own the task
            ValidationError: If a supplied field is invalid
        """
        existing = self.get(task_id)
        if owner_id is not None:
            self._guard.check(existing, owner_id)

        task = self._tasks.save(merge_task(existing, task_data, self._clock()))

        logger.info(f"Updated task {task_id}: {task.title}")
        return task

    def finish(self, task_id: int) -> Task:
        """Mark a task as finished. Finishing twice keeps the first completion date."""
        task = self.get(task_id)
        task.mark_finished(self._clock())
        task = self._tasks.save(task)

        logger.info(f"Finished task {task_id} (completed {task.completion_date})")
        return task

    def unfinish(self, task_id: int) -> Task:
        """Mark a task as not finished. The completion date is kept."""
        task = self.get(task_id)
        task.mark_unfinished()
        task = self._tasks.save(task)

        logger.info(f"Unfinished task {task_id}")
        return task

    def delete(self, owner_id: int, task_id: int) -> None:
        """Delete a task after checking it belongs to ``owner_id``.

        Raises:
            TaskNotFoundError: If no task has this ID
            OwnershipError: If ``owner_id`` does not own the task; nothing is deleted
        """
        task = self.get(task_id)
        self._guard.check(task, owner_id)

        self._tasks.delete_by_id(task_id)
        logger.info(f"Deleted task {task_id} of person {owner_id}")

    def delete_all(self) -> None:
        """Delete every task."""
        self._tasks.delete_all()
        logger.warning("Deleted all tasks")

    def list(self, request: PageRequest) -> Page[Task]:
        """Return one page of tasks in storage order."""
        tasks, total = self._tasks.find_all_paged(request)
        logger.debug(f"Listed page {request.page} of tasks ({len(tasks)} of {total})")
        return Page.of(tasks, request, total)

    def list_all(self) -> List[Task]:
        return self._tasks.find_all()
