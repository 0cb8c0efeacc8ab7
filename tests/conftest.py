"""Test configuration for the todo list."""

import sys
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from todolist.api.dependencies import get_todo_store, reset_todo_store  # noqa: E402
from todolist.main import app  # noqa: E402
from todolist.repositories.todo_repository import TodoSnapshotRepository  # noqa: E402
from todolist.services.todo_store import TodoStore  # noqa: E402
from todolist.settings import get_settings  # noqa: E402
from todolist.storage import InMemoryStorage  # noqa: E402

TODAY = date(2024, 6, 15)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate each test from the caller's TODO_* environment."""
    for name in ("TODO_STORAGE_KEY", "TODO_STORAGE_PATH", "TODO_STRICT_AGE", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_todo_store()
    yield
    get_settings.cache_clear()
    reset_todo_store()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def repository(storage: InMemoryStorage) -> TodoSnapshotRepository:
    return TodoSnapshotRepository(storage)


@pytest.fixture
def todo_store(repository: TodoSnapshotRepository) -> TodoStore:
    """Loaded store whose 'today' is fixed to TODAY."""
    store = TodoStore(repository, today=lambda: TODAY)
    store.load()
    return store


@pytest.fixture
def client(todo_store: TodoStore):
    """Provide a TestClient wired to the test store."""
    app.dependency_overrides[get_todo_store] = lambda: todo_store
    yield TestClient(app)
    app.dependency_overrides.clear()
