"""Task domain model."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Priority(str, Enum):
    """Task priority, ordered LOW < MEDIUM < HIGH by declaration."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        """Position in declaration order, used for sorting."""
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {priority: rank for rank, priority in enumerate(Priority)}


class Category(str, Enum):
    """Task category enumeration."""
    WORK = "WORK"
    PERSONAL = "PERSONAL"
    STUDY = "STUDY"
    OTHER = "OTHER"


class Task(BaseModel):
    """Task domain model.

    A task always belongs to exactly one person. ``completion_date`` is filled
    in the first time the task is finished and is kept if the task is later
    marked unfinished again.
    """

    id: Optional[int] = Field(None, description="Store-assigned task identifier")
    title: str = Field(..., min_length=1, max_length=100, description="Task title")
    description: Optional[str] = Field(None, max_length=500, description="Task description")
    creation_time: datetime = Field(default_factory=datetime.now, description="Task creation timestamp")
    due_date: Optional[datetime] = Field(None, description="Deadline for the task")
    completion_date: Optional[datetime] = Field(None, description="When the task was first finished")
    finished: bool = Field(default=False, description="Whether the task is finished")
    priority: Priority = Field(..., description="Task priority")
    category: Category = Field(..., description="Task category")
    person_id: int = Field(..., description="Identifier of the owning person")

    def mark_finished(self, now: datetime) -> None:
        """Mark task as finished, stamping the completion date only once."""
        self.finished = True
        if self.completion_date is None:
            self.completion_date = now

    def mark_unfinished(self) -> None:
        """Mark task as not finished. The completion date is left as is."""
        self.finished = False
