"""Todo store - business logic layer."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Callable, List, Optional, Tuple

from ..models import TodoBase, TodoCreate, TodoRecord, TodoUpdate, TodoView, new_todo_id
from ..repositories.todo_repository import TodoSnapshotRepository

logger = logging.getLogger(__name__)


class TodoValidationError(ValueError):
    """Raised when a todo payload fails an enabled field check."""


def is_expired(expires_at: str, today: Optional[date] = None) -> bool:
    """Return True when ``expires_at`` is strictly before today.

    Dates are compared as ``YYYY-MM-DD`` strings, which matches calendar order
    for well-formed values.
    """
    current = (today or date.today()).isoformat()
    return expires_at < current


_NUMBER_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


def _is_numeric(value: str) -> bool:
    return _NUMBER_RE.fullmatch(value.strip()) is not None


class TodoStore:
    """Ordered todo list mirrored to a snapshot repository.

    Every mutation builds the new list once, persists it, and only then makes
    it the in-memory list. Positions address records for display; ids address
    them stably.
    """

    def __init__(
        self,
        repository: TodoSnapshotRepository,
        *,
        strict_age: bool = False,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.repository = repository
        self.strict_age = strict_age
        self._today = today
        self._todos: List[TodoRecord] = []

    @property
    def todos(self) -> List[TodoRecord]:
        """Current list snapshot for rendering."""
        return list(self._todos)

    def __len__(self) -> int:
        return len(self._todos)

    def load(self) -> List[TodoRecord]:
        """Replace the in-memory list with the persisted snapshot."""
        todos = self.repository.load()
        if any(not todo.id for todo in todos):
            todos = [todo if todo.id else todo.model_copy(update={"id": new_todo_id()}) for todo in todos]
            try:
                self.repository.save(todos)
            except OSError:
                logger.warning("Could not store assigned todo ids; keeping them in memory only")
            else:
                logger.info("Assigned ids to stored todos without one")
        self._todos = todos
        logger.info("Loaded %d todos", len(todos))
        return self.todos

    def add(self, todo_data: TodoCreate) -> TodoRecord:
        """Append a new todo."""
        self._validate(todo_data)
        todo = TodoRecord(id=new_todo_id()).with_data(todo_data)
        self._commit([*self._todos, todo])
        logger.info("Todo added id=%s index=%d", todo.id, len(self._todos) - 1)
        return todo

    def get(self, index: int) -> Optional[TodoRecord]:
        """Get the todo at ``index``."""
        if not self._valid_index(index):
            return None
        return self._todos[index]

    def update_at(self, index: int, todo_data: TodoBase) -> Optional[TodoRecord]:
        """Replace the todo at ``index``; None if there is no such position."""
        if not self._valid_index(index):
            logger.info("Update skipped: no todo at index=%d", index)
            return None
        self._validate(todo_data)
        updated = self._todos[index].with_data(todo_data)
        todos = list(self._todos)
        todos[index] = updated
        self._commit(todos)
        logger.info("Todo updated id=%s index=%d", updated.id, index)
        return updated

    def delete_at(self, index: int) -> bool:
        """Remove the todo at ``index``."""
        if not self._valid_index(index):
            logger.info("Delete skipped: no todo at index=%d", index)
            return False
        todos = list(self._todos)
        removed = todos.pop(index)
        self._commit(todos)
        logger.info("Todo deleted id=%s index=%d", removed.id, index)
        return True

    def index_of(self, todo_id: str) -> Optional[int]:
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        return None

    def get_by_id(self, todo_id: str) -> Optional[TodoRecord]:
        index = self.index_of(todo_id)
        return None if index is None else self._todos[index]

    def update(self, todo_id: str, todo_data: TodoBase) -> Optional[TodoRecord]:
        """Replace the todo with ``todo_id``."""
        index = self.index_of(todo_id)
        if index is None:
            return None
        return self.update_at(index, todo_data)

    def patch_at(self, index: int, changes: TodoUpdate) -> Optional[TodoRecord]:
        """Apply the fields set in ``changes`` to the todo at ``index``."""
        current = self.get(index)
        if current is None:
            return None
        merged = current.model_copy(update=changes.model_dump(exclude_none=True))
        return self.update_at(index, merged)

    def delete(self, todo_id: str) -> bool:
        """Remove the todo with ``todo_id``."""
        index = self.index_of(todo_id)
        if index is None:
            return False
        return self.delete_at(index)

    def search(self, term: str) -> List[TodoRecord]:
        """Todos whose name contains ``term``, ignoring case."""
        return [todo for _, todo in self.entries(term)]

    def entries(self, term: str = "") -> List[Tuple[int, TodoRecord]]:
        """Matching todos paired with their position in the full list."""
        if not term:
            return list(enumerate(self._todos))
        term_folded = term.casefold()
        return [
            (index, todo)
            for index, todo in enumerate(self._todos)
            if term_folded in todo.name.casefold()
        ]

    def is_expired(self, expires_at: str) -> bool:
        return is_expired(expires_at, self._today())

    def view(self, index: int, todo: TodoRecord) -> TodoView:
        return TodoView(
            index=index,
            position=index + 1,
            id=todo.id,
            name=todo.name,
            age=todo.age,
            expires_at=todo.expires_at,
            expired=self.is_expired(todo.expires_at),
        )

    def views(self, term: str = "") -> List[TodoView]:
        """Display rows for the todos matching ``term``."""
        return [self.view(index, todo) for index, todo in self.entries(term)]

    def _commit(self, todos: List[TodoRecord]) -> None:
        self.repository.save(todos)
        self._todos = todos

    def _valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._todos)

    def _validate(self, todo_data: TodoBase) -> None:
        if self.strict_age and todo_data.age and not _is_numeric(todo_data.age):
            raise TodoValidationError(f"Age must be a number, got {todo_data.age!r}")
