"""Dependency injection helpers for FastAPI."""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Query

from .config import Settings, settings
from .pagination import PageRequest
from .services.person_service import PersonService
from .services.registry import Services, get_services
from .services.task_query_service import TaskQueryService
from .services.task_service import TaskService


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return settings


def get_initialized_services() -> Services:
    """Get the services built at startup."""
    services = get_services()
    if services is None:
        raise RuntimeError("Services are not initialized; start the app through its lifespan")
    return services


def get_person_service(services: Annotated[Services, Depends(get_initialized_services)]) -> PersonService:
    return services.persons


def get_task_service(services: Annotated[Services, Depends(get_initialized_services)]) -> TaskService:
    return services.tasks


def get_task_query_service(services: Annotated[Services, Depends(get_initialized_services)]) -> TaskQueryService:
    return services.queries


def get_page_request(
    settings: Annotated[Settings, Depends(get_settings)],
    page: int = Query(0, ge=0, description="0-based page index"),
    size: Optional[int] = Query(None, ge=1, description="Page size"),
) -> PageRequest:
    """Build a page request, defaulting and capping the size from settings."""
    size = min(size or settings.default_page_size, settings.max_page_size)
    return PageRequest(page=page, size=size)
