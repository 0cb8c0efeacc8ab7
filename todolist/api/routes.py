"""API routes for todo management."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..models import ExpiryCheck, TodoCreate, TodoUpdate, TodoView
from ..services.todo_store import TodoStore, TodoValidationError
from .dependencies import get_todo_store

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Todo not found")


@router.get("/todos", response_model=List[TodoView])
async def list_todos(
    search: str = Query("", description="Case-insensitive name filter"),
    store: TodoStore = Depends(get_todo_store),
) -> List[TodoView]:
    """List todos, optionally filtered by name."""
    return store.views(search)


@router.get("/todos/expired", response_model=ExpiryCheck)
async def check_expired(
    expires_at: str = Query(..., description="Date as YYYY-MM-DD"),
    store: TodoStore = Depends(get_todo_store),
) -> ExpiryCheck:
    """Tell whether a date is already past."""
    return ExpiryCheck(expires_at=expires_at, expired=store.is_expired(expires_at))


@router.post("/todos", response_model=TodoView, status_code=status.HTTP_201_CREATED)
async def create_todo(
    todo_data: TodoCreate,
    store: TodoStore = Depends(get_todo_store),
) -> TodoView:
    """Append a new todo."""
    try:
        todo = store.add(todo_data)
    except TodoValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return store.view(len(store) - 1, todo)


@router.get("/todos/by-id/{todo_id}", response_model=TodoView)
async def get_todo_by_id(
    todo_id: str,
    store: TodoStore = Depends(get_todo_store),
) -> TodoView:
    index = store.index_of(todo_id)
    if index is None:
        raise _not_found()
    return store.view(index, store.todos[index])


@router.put("/todos/by-id/{todo_id}", response_model=TodoView)
async def update_todo_by_id(
    todo_id: str,
    todo_data: TodoCreate,
    store: TodoStore = Depends(get_todo_store),
) -> TodoView:
    try:
        todo = store.update(todo_id, todo_data)
    except TodoValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if todo is None:
        raise _not_found()
    return store.view(store.index_of(todo_id), todo)


@router.delete("/todos/by-id/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo_by_id(
    todo_id: str,
    store: TodoStore = Depends(get_todo_store),
) -> Response:
    if not store.delete(todo_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/todos/{index}", response_model=TodoView)
async def get_todo(
    index: int,
    store: TodoStore = Depends(get_todo_store),
) -> TodoView:
    """Get the todo at a list position."""
    todo = store.get(index)
    if todo is None:
        raise _not_found()
    return store.view(index, todo)


@router.put("/todos/{index}", response_model=TodoView)
async def update_todo(
    index: int,
    todo_data: TodoCreate,
    store: TodoStore = Depends(get_todo_store),
) -> TodoView:
    """Replace the todo at a list position."""
    try:
        todo = store.update_at(index, todo_data)
    except TodoValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if todo is None:
        raise _not_found()
    return store.view(index, todo)


@router.patch("/todos/{index}", response_model=TodoView)
async def patch_todo(
    index: int,
    todo_data: TodoUpdate,
    store: TodoStore = Depends(get_todo_store),
) -> TodoView:
    """Change only the given fields of the todo at a list position."""
    try:
        todo = store.patch_at(index, todo_data)
    except TodoValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if todo is None:
        raise _not_found()
    return store.view(index, todo)


@router.delete("/todos/{index}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(
    index: int,
    store: TodoStore = Depends(get_todo_store),
) -> Response:
    """Delete the todo at a list position."""
    if not store.delete_at(index):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
