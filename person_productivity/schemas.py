"""API request/response schemas for the person productivity service.

Wire names are camelCase (``dueDate``, ``creationTime``); Python code may use
the snake_case field names as well.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .models.task import Category, Priority


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase JSON."""

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Person-related schemas
class PersonCreate(CamelModel):
    """Schema for creating a new person. Any ``id`` in the payload is ignored."""
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")


class PersonUpdate(CamelModel):
    """Schema for a partial person update; ``None`` leaves a field unchanged."""
    name: Optional[str] = Field(None, description="Full name")
    email: Optional[str] = Field(None, description="Email address")


class PersonResponse(CamelModel):
    """Schema for person API responses."""
    id: int = Field(..., description="Unique person identifier")
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")


# Task-related schemas
class TaskCreate(CamelModel):
    """Schema for creating a new task.

    ``finished`` and ``completion_date`` are accepted so clients can post the
    same shape they receive, but a new task always starts unfinished.
    """
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    creation_time: Optional[datetime] = Field(None, description="Creation timestamp, defaults to now")
    due_date: Optional[datetime] = Field(None, description="Deadline, today or later")
    completion_date: Optional[datetime] = Field(None, description="Ignored on create")
    finished: bool = Field(default=False, description="Ignored on create")
    priority: Priority = Field(..., description="Task priority")
    category: Category = Field(..., description="Task category")


class TaskUpdate(CamelModel):
    """Schema for a partial task update; ``None`` leaves a field unchanged.

    ``creation_time`` and ``person_id`` are never applied.
    """
    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    due_date: Optional[datetime] = Field(None, description="Deadline")
    finished: Optional[bool] = Field(None, description="Finished flag")
    priority: Optional[Priority] = Field(None, description="Task priority")
    category: Optional[Category] = Field(None, description="Task category")
    creation_time: Optional[datetime] = Field(None, description="Ignored on update")
    person_id: Optional[int] = Field(None, description="Ignored on update")


class TaskResponse(CamelModel):
    """Schema for task API responses."""
    id: int = Field(..., description="Unique task identifier")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    creation_time: datetime = Field(..., description="Task creation timestamp")
    due_date: Optional[datetime] = Field(None, description="Deadline")
    completion_date: Optional[datetime] = Field(None, description="When the task was first finished")
    finished: bool = Field(..., description="Whether the task is finished")
    priority: Priority = Field(..., description="Task priority")
    category: Category = Field(..., description="Task category")
    person_id: int = Field(..., description="Identifier of the owning person")


# Service-level schemas
class MessageResponse(BaseModel):
    """Schema for plain confirmation messages."""
    message: str = Field(..., description="Confirmation message")


class HealthResponse(BaseModel):
    """Schema for health check responses."""
    status: str = Field(default="healthy", description="Service health status")
    timestamp: datetime = Field(default_factory=datetime.now, description="Health check timestamp")
    version: str = Field(default="1.0.0", description="Application version")
    services: dict = Field(default_factory=dict, description="Per-service initialisation state")
