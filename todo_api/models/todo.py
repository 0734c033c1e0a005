from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import Optional
import enum

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class Todo(SQLModel, table=True):
    """Todo item owned by exactly one user."""
    __tablename__ = "todos"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    is_completed: bool = Field(default=False)
    due_date: Optional[datetime] = None
    priority: Priority = Field(default=Priority.MEDIUM)
    user_id: int = Field(index=True, foreign_key="users.id")
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now, sa_column_kwargs={"onupdate": _utc_now})

    # Relationship back to the owner
    user: Optional["User"] = Relationship(back_populates="todos")
