"""Todo data models using Pydantic."""

from __future__ import annotations

import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_todo_id() -> str:
    return uuid.uuid4().hex


def _coerce_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


class TodoBase(BaseModel):
    """Fields entered through the todo form.

    Values are free-form text: ``age`` comes from a number input but is kept
    as text, and ``expiresAt`` is expected to be an ISO ``YYYY-MM-DD`` string
    without being checked.
    """

    name: str = ""
    age: str = ""
    expires_at: str = Field("", alias="expiresAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("name", "age", "expires_at", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> Any:
        return _coerce_text(value)


class TodoCreate(TodoBase):
    """Payload for creating or replacing a todo."""


class TodoUpdate(BaseModel):
    """Partial changes applied to a todo (fields left unset are kept)."""

    name: Optional[str] = None
    age: Optional[str] = None
    expires_at: Optional[str] = Field(None, alias="expiresAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("name", "age", "expires_at", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> Any:
        if value is None:
            return None
        return _coerce_text(value)


class TodoRecord(TodoBase):
    """Stored todo with its stable identifier.

    Snapshots written before identifiers existed load with an empty ``id``;
    the store assigns one on load.
    """

    id: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_text(cls, value: Any) -> Any:
        return _coerce_text(value)

    def with_data(self, data: TodoBase) -> "TodoRecord":
        """Return a copy carrying ``data`` but keeping this record's id."""
        return TodoRecord(id=self.id, **data.model_dump(include={"name", "age", "expires_at"}))

    def to_storage(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class TodoView(BaseModel):
    """Display row for the todo list."""

    index: int
    position: int
    id: str
    name: str
    age: str
    expires_at: str = Field(alias="expiresAt")
    expired: bool

    model_config = ConfigDict(populate_by_name=True)


class ExpiryCheck(BaseModel):
    expires_at: str = Field(alias="expiresAt")
    expired: bool

    model_config = ConfigDict(populate_by_name=True)
