"""Ownership guard for task mutations."""

import logging

from ..errors import OwnershipError
from ..models.task import Task

logger = logging.getLogger(__name__)


class OwnershipGuard:
    """Checks that a caller-supplied person id is the task's actual owner."""

    def check(self, task: Task, owner_id: int) -> Task:
        """Return ``task`` if ``owner_id`` owns it.

        Raises:
            OwnershipError: If the task belongs to someone else
        """
        if task.person_id != owner_id:
            logger.warning(f"Person {owner_id} tried to modify task {task.id} owned by {task.person_id}")
            raise OwnershipError(person_id=owner_id, task_id=task.id)
        return task
