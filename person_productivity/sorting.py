"""Sort keys for task queries.

Only the fields listed in :class:`SortField` can be sorted on. Each member
carries its own comparator, so building a multi-key order is a matter of
chaining them. Tasks without a due date always sort after dated tasks, in
both directions.
"""

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Optional, Sequence

from .models.task import Task

Comparator = Callable[[Task, Task], int]


def _compare(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


class SortField(str, Enum):
    """Task fields accepted as sort keys."""
    DUE_DATE = "dueDate"
    PRIORITY = "priority"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["SortField"]:
        """Resolve an exact wire name (``dueDate``, ``priority``); ``None`` for anything else."""
        for field in cls:
            if name == field.value:
                return field
        return None

    def key(self, task: Task) -> Any:
        if self is SortField.DUE_DATE:
            return task.due_date
        return task.priority.rank

    def compare(self, left: Task, right: Task, ascending: bool = True) -> int:
        """Compare two tasks on this field; missing values go last either way."""
        left_key, right_key = self.key(left), self.key(right)
        if left_key is None or right_key is None:
            return (left_key is None) - (right_key is None)
        result = _compare(left_key, right_key)
        return result if ascending else -result


@dataclass(frozen=True)
class SortOrder:
    """One key of a multi-field sort."""

    field: SortField
    ascending: bool = True

    @classmethod
    def parse(cls, field: str, direction: Optional[str] = None) -> Optional["SortOrder"]:
        """Build an order from request strings; only ``"desc"`` means descending."""
        sort_field = SortField.parse(field)
        if sort_field is None:
            return None
        descending = direction is not None and direction.strip().lower() == "desc"
        return cls(sort_field, ascending=not descending)


def parse_sort_orders(fields: Optional[Sequence[str]], orders: Optional[Sequence[str]] = None) -> List[SortOrder]:
    """Pair field names with order flags, skipping unknown fields.

    Missing order flags default to ascending.
    """
    result = []
    for index, name in enumerate(fields or []):
        direction = orders[index] if orders is not None and index < len(orders) else None
        order = SortOrder.parse(name, direction)
        if order is not None:
            result.append(order)
    return result


def build_comparator(orders: Sequence[SortOrder]) -> Optional[Comparator]:
    """Chain per-field comparators; ``None`` when there is nothing to sort on."""
    if not orders:
        return None

    def comparator(left: Task, right: Task) -> int:
        for order in orders:
            result = order.field.compare(left, right, order.ascending)
            if result:
                return result
        return 0

    return comparator


def sort_tasks(tasks: Iterable[Task], orders: Sequence[SortOrder]) -> List[Task]:
    """Return ``tasks`` ordered by ``orders``.

    The sort is stable, so tasks equal on every key keep their incoming order.
    """
    tasks = list(tasks)
    comparator = build_comparator(orders)
    if comparator is None:
        return tasks
    return sorted(tasks, key=cmp_to_key(comparator))
