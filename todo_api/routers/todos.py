from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Priority
from ..schemas.todo import (
    MAX_LIMIT,
    MAX_PAGE,
    Message,
    SortOrder,
    Todo as TodoSchema,
    TodoCreate,
    TodoPage,
    TodoQuery,
    TodoSortField,
    TodoStatus,
    TodoUpdate,
)
from ..services.todos import TodoService
from .auth import get_current_user_id

router = APIRouter()


def get_todo_service(db: Session = Depends(get_db)) -> TodoService:
    return TodoService(db)


def get_todo_query(
    status: Optional[TodoStatus] = None,
    priority: Optional[Priority] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(10, ge=1, le=MAX_LIMIT),
    sort_by: TodoSortField = Query(TodoSortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
) -> TodoQuery:
    return TodoQuery(
        status=status,
        priority=priority,
        search=search,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.post("", response_model=TodoSchema, status_code=status.HTTP_201_CREATED)
def create_todo(
    todo: TodoCreate,
    current_user_id: int = Depends(get_current_user_id),
    todo_service: TodoService = Depends(get_todo_service),
):
    """Create a new todo owned by the caller."""
    return todo_service.create(todo, current_user_id)


@router.get("", response_model=TodoPage)
def list_todos(
    current_user_id: int = Depends(get_current_user_id),
    query: TodoQuery = Depends(get_todo_query),
    todo_service: TodoService = Depends(get_todo_service),
):
    """List the caller's todos with filtering, search, sorting and paging."""
    return todo_service.list(current_user_id, query)


@router.get("/{todo_id}", response_model=TodoSchema)
def get_todo(
    todo_id: int,
    current_user_id: int = Depends(get_current_user_id),
    todo_service: TodoService = Depends(get_todo_service),
):
    return todo_service.get(todo_id, current_user_id)


@router.patch("/{todo_id}", response_model=TodoSchema)
def update_todo(
    todo_id: int,
    todo_update: TodoUpdate,
    current_user_id: int = Depends(get_current_user_id),
    todo_service: TodoService = Depends(get_todo_service),
):
    """Update only the fields present in the request body."""
    return todo_service.update(todo_id, todo_update, current_user_id)


@router.delete("/{todo_id}", response_model=Message)
def delete_todo(
    todo_id: int,
    current_user_id: int = Depends(get_current_user_id),
    todo_service: TodoService = Depends(get_todo_service),
):
    return todo_service.delete(todo_id, current_user_id)
