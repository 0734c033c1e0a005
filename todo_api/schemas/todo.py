from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import List, Optional
import enum

from ..models import Priority

# page and limit bounds keep the row offset inside a signed 64-bit integer
MAX_PAGE = 2**31 - 1
MAX_LIMIT = 2**31 - 1

def _assume_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

class TodoStatus(str, enum.Enum):
    COMPLETED = "completed"
    PENDING = "pending"

class SortOrder(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"

class TodoSortField(str, enum.Enum):
    """Todo fields a listing can be ordered by, as named in the JSON API."""
    ID = "id"
    TITLE = "title"
    DESCRIPTION = "description"
    IS_COMPLETED = "isCompleted"
    DUE_DATE = "dueDate"
    PRIORITY = "priority"
    USER_ID = "userId"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

class TodoBase(BaseModel):
    """Base todo schema with common fields."""
    title: str = Field(min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Priority = Priority.MEDIUM
    is_completed: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value):
        return _assume_utc(value)

class TodoCreate(TodoBase):
    """Schema for creating new todos."""
    pass

class TodoUpdate(BaseModel):
    """Schema for partially updating a todo. Omitted fields keep their value."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    is_completed: Optional[bool] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True

    @field_validator("title", "priority", "is_completed")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value):
        return _assume_utc(value)

class Todo(TodoBase):
    """Complete todo schema with all fields."""
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class TodoQuery(BaseModel):
    """Filter, sort and page window for listing todos."""
    status: Optional[TodoStatus] = None
    priority: Optional[Priority] = None
    search: Optional[str] = None
    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    limit: int = Field(default=10, ge=1, le=MAX_LIMIT)
    sort_by: TodoSortField = TodoSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

class TodoPage(BaseModel):
    data: List[Todo]
    total: int
    page: int
    limit: int
    total_pages: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class Message(BaseModel):
    message: str
