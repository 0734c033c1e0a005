from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import Optional, List

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

class User(SQLModel, table=True):
    """User model for authentication and todo ownership."""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    email: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now, sa_column_kwargs={"onupdate": _utc_now})

    # Relationship to todos
    todos: List["Todo"] = Relationship(back_populates="user")
