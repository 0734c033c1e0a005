from .todo import Priority, Todo
from .user import User

# Export all models for easy importing
__all__ = ["Priority", "Todo", "User"]
