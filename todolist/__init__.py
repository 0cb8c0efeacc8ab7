"""Todo list manager: a persisted to-do store with an HTTP API and a CLI."""

from .models import TodoCreate, TodoRecord, TodoUpdate, TodoView
from .services.todo_store import TodoStore, TodoValidationError, is_expired

__all__ = [
    "TodoCreate",
    "TodoRecord",
    "TodoStore",
    "TodoUpdate",
    "TodoValidationError",
    "TodoView",
    "is_expired",
]

__version__ = "1.0.0"
