"""Populate the development database with sample users and todos."""
import logging
from datetime import datetime, timedelta, timezone

from todo_api.database import create_tables, get_session
from todo_api.models import Priority, User
from todo_api.schemas.todo import TodoCreate
from todo_api.schemas.user import UserCreate
from todo_api.services.auth import AuthService
from todo_api.services.todos import TodoService

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = "password123"

SAMPLE_USERS = [
    ("john_doe", "john@example.com"),
    ("jane_smith", "jane@example.com"),
]

# username -> todos (due dates are days from now)
SAMPLE_TODOS = {
    "john_doe": [
        dict(
            title="Complete project documentation",
            description="Write comprehensive documentation for the todo app",
            priority=Priority.HIGH,
            due_in_days=7,
        ),
        dict(
            title="Review code changes",
            description="Review pull requests from team members",
            priority=Priority.MEDIUM,
            is_completed=True,
        ),
        dict(
            title="Buy groceries",
            description="Milk, bread, eggs, and fruits",
            priority=Priority.LOW,
            due_in_days=2,
        ),
    ],
    "jane_smith": [
        dict(
            title="Prepare presentation",
            description="Create slides for quarterly review",
            priority=Priority.HIGH,
            due_in_days=3,
        ),
    ],
}


def seed(db) -> int:
    """Create the sample data; users that already exist are skipped.

    Returns the number of users created.
    """
    auth_service = AuthService(db)
    todo_service = TodoService(db)
    created = 0

    for username, email in SAMPLE_USERS:
        if db.query(User).filter(User.username == username).first():
            logger.info("User %s already exists, skipping", username)
            continue

        user = auth_service.register(
            UserCreate(username=username, email=email, password=SAMPLE_PASSWORD)
        )
        created += 1

        for sample in SAMPLE_TODOS.get(username, []):
            fields = dict(sample)
            due_in_days = fields.pop("due_in_days", None)
            if due_in_days is not None:
                fields["due_date"] = datetime.now(timezone.utc) + timedelta(days=due_in_days)
            todo_service.create(TodoCreate(**fields), user.id)

    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    # Create tables if not exist
    create_tables()

    with get_session() as session:
        count = seed(session)

    logger.info("Seed data created: %d new user(s)", count)
