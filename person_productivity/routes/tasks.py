"""Task management CRUD, filter and sort routes."""

import logging
from datetime import datetime
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..deps import get_page_request, get_task_query_service, get_task_service
from ..models.task import Category, Priority, Task
from ..pagination import Page, PageRequest
from ..schemas import MessageResponse, TaskCreate, TaskResponse, TaskUpdate
from ..services.task_query_service import TaskQueryService
from ..services.task_service import TaskService
from ..sorting import SortField

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
QueryServiceDep = Annotated[TaskQueryService, Depends(get_task_query_service)]


def to_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        creation_time=task.creation_time,
        due_date=task.due_date,
        completion_date=task.completion_date,
        finished=task.finished,
        priority=task.priority,
        category=task.category,
        person_id=task.person_id,
    )


def to_responses(tasks: List[Task]) -> List[TaskResponse]:
    return [to_response(task) for task in tasks]


def is_ascending(order: Optional[str]) -> bool:
    return order is None or order.strip().lower() != "desc"


@router.get("", response_model=Page[TaskResponse])
async def list_tasks(
    task_service: TaskServiceDep,
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[TaskResponse]:
    """List tasks one page at a time."""
    return task_service.list(page_request).map(to_response)


@router.delete("/all", response_model=MessageResponse)
async def delete_all_tasks(task_service: TaskServiceDep) -> MessageResponse:
    """Delete every task."""
    task_service.delete_all()
    return MessageResponse(message="All tasks deleted successfully.")


@router.get("/range", response_model=List[TaskResponse])
async def filter_by_due_date_range(
    query_service: QueryServiceDep,
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
) -> List[TaskResponse]:
    """List tasks due between two dates, both ends included."""
    return to_responses(query_service.by_due_date_range(start_date, end_date))


@router.get("/due/{due_date}", response_model=List[TaskResponse])
async def filter_by_due_date(due_date: datetime, query_service: QueryServiceDep) -> List[TaskResponse]:
    """List tasks due at exactly this date and time."""
    return to_responses(query_service.by_due_date(due_date))


@router.get("/person/{person_id}", response_model=List[TaskResponse])
async def list_tasks_for_person(
    person_id: int,
    query_service: QueryServiceDep,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
) -> List[TaskResponse]:
    """List a person's tasks, optionally only those due within a date range."""
    if start_date is not None and end_date is not None:
        return to_responses(query_service.by_person_and_date_range(person_id, start_date, end_date))
    return to_responses(query_service.by_person(person_id))


@router.patch("/person/{person_id}/task/{task_id}", response_model=TaskResponse)
async def update_owned_task(
    person_id: int,
    task_id: int,
    task_data: TaskUpdate,
    task_service: TaskServiceDep,
) -> TaskResponse:
    """Update a task after checking that ``person_id`` owns it."""
    logger.info(f"Updating task {task_id} for person {person_id}")
    return to_response(task_service.update(task_id, task_data, owner_id=person_id))


@router.delete("/person/{person_id}/task/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(person_id: int, task_id: int, task_service: TaskServiceDep):
    """Delete a task after checking that ``person_id`` owns it."""
    logger.info(f"Deleting task {task_id} for person {person_id}")
    task_service.delete(person_id, task_id)


@router.get("/category/{category}", response_model=List[TaskResponse])
async def filter_by_category(category: Category, query_service: QueryServiceDep) -> List[TaskResponse]:
    return to_responses(query_service.by_category(category))


@router.get("/priority/{priority}", response_model=List[TaskResponse])
async def filter_by_priority(priority: Priority, query_service: QueryServiceDep) -> List[TaskResponse]:
    return to_responses(query_service.by_priority(priority))


@router.get("/sort", response_model=List[TaskResponse])
async def sort_tasks(
    query_service: QueryServiceDep,
    sort: Optional[List[str]] = Query(None, description="Fields to sort by, in order"),
    order: Optional[List[str]] = Query(None, description="asc or desc for each field"),
) -> List[TaskResponse]:
    """Sort tasks by several fields; unsupported field names are ignored."""
    return to_responses(query_service.sort_by_multiple_fields(sort, order))


@router.get("/sort/dueDate", response_model=List[TaskResponse])
async def sort_by_due_date(query_service: QueryServiceDep, order: str = Query("asc")) -> List[TaskResponse]:
    return to_responses(query_service.sort_by_field(SortField.DUE_DATE, is_ascending(order)))


@router.get("/sort/priority", response_model=List[TaskResponse])
async def sort_by_priority(query_service: QueryServiceDep, order: str = Query("asc")) -> List[TaskResponse]:
    return to_responses(query_service.sort_by_field(SortField.PRIORITY, is_ascending(order)))


@router.get("/sort/dueDate/priority", response_model=List[TaskResponse])
async def sort_by_due_date_and_priority(
    query_service: QueryServiceDep,
    due_date_order: str = Query("asc", alias="dueDateOrder"),
    priority_order: str = Query("asc", alias="priorityOrder"),
) -> List[TaskResponse]:
    return to_responses(
        query_service.sort_by_due_date_and_priority(is_ascending(due_date_order), is_ascending(priority_order))
    )


@router.post("/{person_id}", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(person_id: int, task_data: TaskCreate, task_service: TaskServiceDep) -> TaskResponse:
    """Create a new task for a person.

    Args:
        person_id: ID of the owning person
        task_data: Task creation data
        task_service: Task service instance

    Returns:
        Created task response
    """
    logger.info(f"Creating new task for person {person_id}: {task_data.title}")
    return to_response(task_service.create(task_data, person_id))


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, task_service: TaskServiceDep) -> TaskResponse:
    """Get a specific task by ID."""
    logger.debug(f"Getting task: {task_id}")
    return to_response(task_service.get(task_id))


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: int, task_data: TaskUpdate, task_service: TaskServiceDep) -> TaskResponse:
    """Update the supplied fields of a task.

    Args:
        task_id: Task ID
        task_data: Partial task data
        task_service: Task service instance

    Returns:
        Updated task response
    """
    logger.info(f"Updating task: {task_id}")
    return to_response(task_service.update(task_id, task_data))


@router.patch("/{task_id}/finish", response_model=TaskResponse)
async def finish_task(task_id: int, task_service: TaskServiceDep) -> TaskResponse:
    return to_response(task_service.finish(task_id))


@router.patch("/{task_id}/unfinish", response_model=TaskResponse)
async def unfinish_task(task_id: int, task_service: TaskServiceDep) -> TaskResponse:
    return to_response(task_service.unfinish(task_id))
