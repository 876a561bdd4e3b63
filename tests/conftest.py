"""Shared test fixtures and configuration for the test suite."""

from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add the parent directory to the path for imports
import sys

sys.path.append(str(Path(__file__).parent.parent))

from person_productivity.config import Settings
from person_productivity.main import create_app
from person_productivity.models.person import Person
from person_productivity.models.task import Category, Priority
from person_productivity.schemas import TaskCreate
from person_productivity.services.registry import Services, build_services
from person_productivity.store.memory import InMemoryStore

from fakes import NOW, FakeClock


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings that keep logs out of the working tree."""
    return Settings(
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        environment="test",
        default_page_size=5,
        max_page_size=10,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def services(store, clock) -> Services:
    """Services wired over a fresh in-memory store and the fixed clock."""
    return build_services(store=store, clock=clock)


@pytest.fixture
def person_service(services):
    return services.persons


@pytest.fixture
def task_service(services):
    return services.tasks


@pytest.fixture
def query_service(services):
    return services.queries


@pytest.fixture
def alice(person_service) -> Person:
    return person_service.create("Alice Doe", "alice@example.com")


@pytest.fixture
def bob(person_service) -> Person:
    return person_service.create("Bob Roe", "bob@example.com")


@pytest.fixture
def make_task_data():
    """Factory for task creation payloads with sensible defaults."""
    def factory(**overrides) -> TaskCreate:
        fields = {
            "title": "Write report",
            "description": "Quarterly numbers",
            "due_date": datetime(2025, 1, 10, 9, 0),
            "priority": Priority.MEDIUM,
            "category": Category.WORK,
        }
        fields.update(overrides)
        return TaskCreate(**fields)

    return factory


@pytest.fixture
def client(test_settings, services) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    app = create_app(settings=test_settings, services=services)
    with TestClient(app) as test_client:
        yield test_client


# Test data fixtures
@pytest.fixture
def sample_person_data():
    """Sample person payload for API tests."""
    return {"name": "Carol Poe", "email": "carol@example.com"}


@pytest.fixture
def sample_task_data():
    """Sample task payload for API tests, in wire (camelCase) form."""
    return {
        "title": "Plan sprint",
        "description": "Pick stories for next sprint",
        "dueDate": "2025-01-05T10:00:00",
        "priority": "HIGH",
        "category": "WORK",
    }
