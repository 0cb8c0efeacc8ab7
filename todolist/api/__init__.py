"""HTTP routes and dependency providers for the todo API."""

from .dependencies import get_todo_store, reset_todo_store
from .routes import router

__all__ = ["get_todo_store", "reset_todo_store", "router"]
