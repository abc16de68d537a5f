from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from ..filters import run_filters
from ..models import Todo
from ..repositories import TodoStore
from ..schemas import TodoCreate, TodoOut

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


def _get_store(request: Request) -> TodoStore:
    """
    Dependency returning the store the application was built with.
    """
    return request.app.state.store


def _filtered_todo(payload: TodoCreate, request: Request) -> Todo:
    """
    Dependency that runs the creation filters against the request body.
    A failing filter raises before the handler is entered.
    """
    todo = payload.to_entity()
    run_filters(request.app.state.create_filters, todo, request.app.state.clock())
    return todo


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Add a Todo item. The due date must be in the future and the name at least 3 characters.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Validation error or malformed request"},
    },
)
def create_todo(
    response: Response,
    todo: Todo = Depends(_filtered_todo),
    store: TodoStore = Depends(_get_store),
) -> TodoOut:
    """
    Create a new Todo and point the Location header at it.
    """
    store.add(todo)
    response.headers["Location"] = f"/todos/{todo.id}"
    return TodoOut.from_entity(todo)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List every Todo item in insertion order.",
)
def list_todos(store: TodoStore = Depends(_get_store)) -> List[TodoOut]:
    return [TodoOut.from_entity(t) for t in store.list_all()]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get the first Todo item with the given ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found (empty body)"},
    },
)
def get_todo(todo_id: int, store: TodoStore = Depends(_get_store)):
    """
    Retrieve a single Todo item by its ID.
    """
    todo = store.get_by_id(todo_id)
    if todo is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return TodoOut.from_entity(todo)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete every Todo item with the given ID. Succeeds even when none exist.",
    responses={204: {"description": "Todo(s) deleted, or nothing to delete"}},
)
def delete_todo(todo_id: int, store: TodoStore = Depends(_get_store)) -> Response:
    store.delete_by_id(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
