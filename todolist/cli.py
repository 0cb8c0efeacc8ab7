"""Command line front-end for the todo list."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from typing import Optional

from .logging_utils import configure_logging
from .models import TodoView
from .repositories.todo_repository import TodoSnapshotRepository
from .services.todo_form import TodoForm
from .services.todo_store import TodoStore, TodoValidationError, is_expired
from .settings import DEFAULT_CLI_STORAGE_PATH, get_settings
from .storage import JsonFileStorage

EXIT_NOT_FOUND = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todolist", description="Manage a local todo list.")
    parser.add_argument("--storage", help="JSON storage file (default: TODO_STORAGE_PATH or data/todos.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log store operations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show todos")
    list_parser.add_argument("--search", default="", help="Only names containing this text")

    add_parser = subparsers.add_parser("add", help="Add a todo")
    add_parser.add_argument("--name", default="")
    add_parser.add_argument("--age", default="")
    add_parser.add_argument("--expires-at", default="", help="Date as YYYY-MM-DD")

    edit_parser = subparsers.add_parser("edit", help="Edit the todo at a listed position")
    edit_parser.add_argument("position", type=int, help="Position as shown by 'list'")
    edit_parser.add_argument("--name")
    edit_parser.add_argument("--age")
    edit_parser.add_argument("--expires-at")

    delete_parser = subparsers.add_parser("delete", help="Delete the todo at a listed position")
    delete_parser.add_argument("position", type=int, help="Position as shown by 'list'")

    expired_parser = subparsers.add_parser("expired", help="Check whether a date is past")
    expired_parser.add_argument("date", help="Date as YYYY-MM-DD")
    return parser


def open_store(storage_path: Optional[str]) -> TodoStore:
    settings = get_settings()
    path = storage_path or settings.storage_path or DEFAULT_CLI_STORAGE_PATH
    repository = TodoSnapshotRepository(JsonFileStorage(path), key=settings.storage_key)
    store = TodoStore(repository, strict_age=settings.strict_age)
    store.load()
    return store


def format_todo(view: TodoView) -> str:
    status = "expired" if view.expired else "active"
    return f"{view.position}. Name: {view.name} | Age: {view.age} | Expires At: {view.expires_at} [{status}]"


def _not_found(position: int) -> int:
    print(f"No todo at position {position}", file=sys.stderr)
    return EXIT_NOT_FOUND


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.INFO if args.verbose else logging.WARNING)

    if args.command == "expired":
        print("expired" if is_expired(args.date, date.today()) else "not expired")
        return 0

    store = open_store(args.storage)
    form = TodoForm(store)
    try:
        if args.command == "list":
            views = store.views(args.search)
            if not views:
                print("No todos.")
            for view in views:
                print(format_todo(view))
        elif args.command == "add":
            form.open_create()
            form.change("name", args.name)
            form.change("age", args.age)
            form.change("expiresAt", args.expires_at)
            todo = form.submit()
            print(format_todo(store.view(len(store) - 1, todo)))
        elif args.command == "edit":
            index = args.position - 1
            if not form.open_edit(index):
                return _not_found(args.position)
            for field, value in (("name", args.name), ("age", args.age), ("expiresAt", args.expires_at)):
                if value is not None:
                    form.change(field, value)
            todo = form.submit()
            print(format_todo(store.view(index, todo)))
        elif args.command == "delete":
            if not store.delete_at(args.position - 1):
                return _not_found(args.position)
            print(f"Deleted todo {args.position}")
    except TodoValidationError as exc:
        print(f"Invalid todo: {exc}", file=sys.stderr)
        return EXIT_INVALID
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
