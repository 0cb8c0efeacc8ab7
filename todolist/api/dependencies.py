"""API dependencies for todo management."""

from __future__ import annotations

from typing import Optional

from ..repositories.todo_repository import TodoSnapshotRepository
from ..services.todo_store import TodoStore
from ..settings import get_settings
from ..storage import build_storage

_store: Optional[TodoStore] = None


def build_todo_store() -> TodoStore:
    """Create a loaded store from the current settings."""
    settings = get_settings()
    repository = TodoSnapshotRepository(build_storage(settings.storage_path), key=settings.storage_key)
    store = TodoStore(repository, strict_age=settings.strict_age)
    store.load()
    return store


def get_todo_store() -> TodoStore:
    """Dependency for getting the todo store instance."""
    global _store
    if _store is None:
        _store = build_todo_store()
    return _store


def reset_todo_store() -> None:
    """Drop the cached store so the next request builds a fresh one."""
    global _store
    _store = None
