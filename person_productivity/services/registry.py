"""Process-wide service instances, built once during app startup."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..store.memory import InMemoryStore
from .ownership import OwnershipGuard
from .person_service import PersonService
from .task_query_service import TaskQueryService
from .task_service import TaskService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """The store and every service wired on top of it."""

    store: InMemoryStore
    persons: PersonService
    tasks: TaskService
    queries: TaskQueryService


def build_services(
    store: Optional[InMemoryStore] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> Services:
    """Wire the services over ``store`` (a fresh in-memory store by default)."""
    store = store or InMemoryStore()
    persons = PersonService(store.persons)
    return Services(
        store=store,
        persons=persons,
        tasks=TaskService(store.tasks, persons, guard=OwnershipGuard(), clock=clock),
        queries=TaskQueryService(store.tasks, persons),
    )


# Global service instances - will be initialized during app startup
_services: Optional[Services] = None


def get_services() -> Optional[Services]:
    """Get the global services, or None if not initialized."""
    return _services


def initialize_services(services: Optional[Services] = None) -> Services:
    """Initialize the global services.

    Args:
        services: Pre-built services to install, e.g. from a test

    Returns:
        Initialized services
    """
    global _services
    _services = services or build_services()
    logger.info("Services initialized")
    return _services
