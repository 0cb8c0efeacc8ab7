"""Business logic for the todo list."""

from .todo_form import FormMode, TodoForm
from .todo_store import TodoStore, TodoValidationError, is_expired

__all__ = ["FormMode", "TodoForm", "TodoStore", "TodoValidationError", "is_expired"]
