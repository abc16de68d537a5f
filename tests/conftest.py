from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.repositories import InMemoryTodoStore, seed_todos
from todo_api.settings import Settings

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
TOMORROW = NOW + timedelta(days=1)
YESTERDAY = NOW - timedelta(days=1)


def fixed_clock() -> datetime:
    return NOW


def todo_payload(id=4, name="Go shopping", due_date=TOMORROW, is_complete=False):
    due = due_date.isoformat() if isinstance(due_date, datetime) else due_date
    return {"id": id, "name": name, "dueDate": due, "isComplete": is_complete}


@pytest.fixture
def store() -> InMemoryTodoStore:
    return InMemoryTodoStore(seed_todos(NOW))


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store, clock=fixed_clock)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
