"""Data access for the persisted todo snapshot."""

from .todo_repository import TodoSnapshotRepository

__all__ = ["TodoSnapshotRepository"]
