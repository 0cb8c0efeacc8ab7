"""Create/edit form state for the todo list."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from ..models import TodoCreate, TodoRecord
from .todo_store import TodoStore

FORM_FIELDS = ("name", "age", "expiresAt")


class FormMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


def _blank() -> Dict[str, str]:
    return {field: "" for field in FORM_FIELDS}


class TodoForm:
    """Form that either adds a new todo or edits the one at a selected position."""

    def __init__(self, store: TodoStore) -> None:
        self.store = store
        self.mode = FormMode.CLOSED
        self.selected_index: Optional[int] = None
        self.data = _blank()

    @property
    def is_open(self) -> bool:
        return self.mode is not FormMode.CLOSED

    @property
    def submit_label(self) -> str:
        return "Update" if self.mode is FormMode.EDIT else "Add"

    def open_create(self) -> None:
        self.mode = FormMode.CREATE
        self.selected_index = None
        self.data = _blank()

    def open_edit(self, index: int) -> bool:
        """Prefill the form from the todo at ``index``; False if there is none."""
        todo = self.store.get(index)
        if todo is None:
            return False
        self.mode = FormMode.EDIT
        self.selected_index = index
        self.data = {key: value for key, value in todo.to_storage().items() if key in FORM_FIELDS}
        return True

    def change(self, field: str, value: str) -> None:
        if field not in FORM_FIELDS:
            raise KeyError(f"Unknown form field: {field}")
        self.data[field] = value

    def submit(self) -> Optional[TodoRecord]:
        """Add or update from the form data, then close the form.

        Returns None when the edited position no longer exists.
        """
        if self.mode is FormMode.CLOSED:
            raise RuntimeError("Form is not open")
        payload = TodoCreate.model_validate(self.data)
        if self.mode is FormMode.EDIT and self.selected_index is not None:
            todo = self.store.update_at(self.selected_index, payload)
        else:
            todo = self.store.add(payload)
        self.cancel()
        return todo

    def cancel(self) -> None:
        self.mode = FormMode.CLOSED
        self.selected_index = None
        self.data = _blank()
