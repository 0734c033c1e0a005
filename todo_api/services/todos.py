import logging
import math
from datetime import datetime, timezone

from sqlalchemy import asc, case, desc
from sqlalchemy.orm import Session

from ..errors import NotFoundError, ValidationError
from ..models import Priority, Todo
from ..schemas.todo import (
    SortOrder,
    Todo as TodoSchema,
    TodoCreate,
    TodoPage,
    TodoQuery,
    TodoStatus,
    TodoUpdate,
)

logger = logging.getLogger(__name__)

# the enum column stores member names; order priorities low < medium < high
PRIORITY_RANK = case(
    (Todo.priority == Priority.LOW, 0),
    (Todo.priority == Priority.MEDIUM, 1),
    else_=2,
)

# JSON field name -> column
SORT_COLUMNS = {
    "id": Todo.id,
    "title": Todo.title,
    "description": Todo.description,
    "isCompleted": Todo.is_completed,
    "dueDate": Todo.due_date,
    "priority": PRIORITY_RANK,
    "userId": Todo.user_id,
    "createdAt": Todo.created_at,
    "updatedAt": Todo.updated_at,
}


class TodoService:
    """CRUD on todos, every query scoped to the owning user.

    Rows belonging to another user behave exactly like rows that do not
    exist, so callers only ever see ``NotFoundError``.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, todo_in: TodoCreate, owner_id: int) -> Todo:
        todo = Todo(**todo_in.model_dump(), user_id=owner_id)
        self.db.add(todo)
        self.db.commit()
        self.db.refresh(todo)
        logger.info("Created todo %s for user %s", todo.id, owner_id)
        return todo

    def list(self, owner_id: int, query: TodoQuery) -> TodoPage:
        sort_key = getattr(query.sort_by, "value", query.sort_by)
        column = SORT_COLUMNS.get(sort_key)
        if column is None:
            raise ValidationError(f"Cannot sort by unknown field {sort_key!r}")

        todos = self.db.query(Todo).filter(Todo.user_id == owner_id)

        if query.status is not None:
            todos = todos.filter(Todo.is_completed.is_(query.status == TodoStatus.COMPLETED))
        if query.priority is not None:
            todos = todos.filter(Todo.priority == query.priority)
        if query.search:
            todos = todos.filter(Todo.title.icontains(query.search, autoescape=True))

        total = todos.count()

        direction = asc if query.sort_order == SortOrder.ASC else desc
        rows = (
            todos.order_by(direction(column), direction(Todo.id))
            .offset((query.page - 1) * query.limit)
            .limit(query.limit)
            .all()
        )

        return TodoPage(
            data=[TodoSchema.model_validate(row) for row in rows],
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=math.ceil(total / query.limit),
        )

    def get(self, todo_id: int, owner_id: int) -> Todo:
        todo = self.db.query(Todo).filter(Todo.id == todo_id, Todo.user_id == owner_id).first()
        if not todo:
            raise NotFoundError("Todo not found")
        return todo

    def update(self, todo_id: int, todo_update: TodoUpdate, owner_id: int) -> Todo:
        todo = self.get(todo_id, owner_id)

        for field, value in todo_update.model_dump(exclude_unset=True).items():
            setattr(todo, field, value)

        todo.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(todo)
        return todo

    def delete(self, todo_id: int, owner_id: int) -> dict:
        todo = self.get(todo_id, owner_id)
        self.db.delete(todo)
        self.db.commit()
        logger.info("Deleted todo %s for user %s", todo_id, owner_id)
        return {"message": "Todo deleted successfully"}
