"""Service-level tests that call AuthService and TodoService directly."""

import pytest

from seed import SAMPLE_TODOS, SAMPLE_USERS, seed
from todo_api.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from todo_api.models import Priority, Todo, User
from todo_api.schemas.todo import TodoCreate, TodoQuery, TodoUpdate
from todo_api.schemas.user import UserCreate
from todo_api.services.auth import AuthService
from todo_api.services.todos import TodoService


@pytest.fixture
def auth_service(db):
    return AuthService(db)


@pytest.fixture
def todo_service(db):
    return TodoService(db)


@pytest.fixture
def owner(auth_service):
    return auth_service.register(
        UserCreate(username="alice", email="alice@example.com", password="pw123456")
    )


class TestAuthService:
    """Test cases for AuthService."""

    def test_register_stores_hash(self, owner):
        assert owner.id is not None
        assert owner.hashed_password != "pw123456"

    def test_register_conflict(self, auth_service, owner):
        with pytest.raises(ConflictError):
            auth_service.register(
                UserCreate(username="alice", email="new@example.com", password="pw123456")
            )

    def test_login(self, auth_service, owner):
        result = auth_service.login("alice", "pw123456")
        assert result.user.id == owner.id
        assert auth_service.authenticate(result.access_token) == owner.id

    def test_login_failures(self, auth_service, owner):
        with pytest.raises(UnauthorizedError) as wrong_password:
            auth_service.login("alice", "wrong-password")
        with pytest.raises(UnauthorizedError) as unknown_user:
            auth_service.login("nobody", "pw123456")
        assert wrong_password.value.detail == unknown_user.value.detail

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_authenticate_rejects(self, auth_service, token):
        with pytest.raises(UnauthorizedError):
            auth_service.authenticate(token)

    def test_get_user(self, auth_service, owner):
        assert auth_service.get_user(owner.id).username == "alice"
        with pytest.raises(NotFoundError):
            auth_service.get_user(9999)


class TestTodoService:
    """Test cases for TodoService."""

    def test_create_defaults(self, todo_service, owner):
        todo = todo_service.create(TodoCreate(title="Buy milk"), owner.id)
        assert todo.user_id == owner.id
        assert todo.priority == Priority.MEDIUM
        assert todo.is_completed is False

    def test_update_keeps_omitted_fields(self, todo_service, owner):
        todo = todo_service.create(
            TodoCreate(title="Buy milk", description="Two litres", priority=Priority.LOW), owner.id
        )
        updated = todo_service.update(todo.id, TodoUpdate(is_completed=True), owner.id)
        assert updated.is_completed is True
        assert updated.title == "Buy milk"
        assert updated.description == "Two litres"
        assert updated.priority == Priority.LOW

    def test_wrong_owner_is_not_found(self, todo_service, owner):
        todo = todo_service.create(TodoCreate(title="Buy milk"), owner.id)
        with pytest.raises(NotFoundError):
            todo_service.get(todo.id, owner.id + 1)
        with pytest.raises(NotFoundError):
            todo_service.delete(todo.id, owner.id + 1)

    def test_delete(self, db, todo_service, owner):
        todo = todo_service.create(TodoCreate(title="Buy milk"), owner.id)
        assert todo_service.delete(todo.id, owner.id) == {"message": "Todo deleted successfully"}
        assert db.query(Todo).count() == 0

    def test_list_page(self, todo_service, owner):
        for i in range(15):
            todo_service.create(TodoCreate(title=f"Todo {i}"), owner.id)
        page = todo_service.list(owner.id, TodoQuery(page=2, limit=10))
        assert len(page.data) == 5
        assert page.total == 15
        assert page.total_pages == 2

    def test_list_unknown_sort_field(self, todo_service, owner):
        query = TodoQuery.model_construct(sort_by="hashedPassword")
        with pytest.raises(ValidationError):
            todo_service.list(owner.id, query)


class TestSeed:
    """Test cases for the development seed script."""

    def test_seed(self, db):
        assert seed(db) == len(SAMPLE_USERS)
        assert db.query(User).count() == len(SAMPLE_USERS)
        assert db.query(Todo).count() == sum(len(todos) for todos in SAMPLE_TODOS.values())

        john = db.query(User).filter(User.username == "john_doe").one()
        assert {todo.title for todo in john.todos} == {
            "Complete project documentation",
            "Review code changes",
            "Buy groceries",
        }

    def test_seed_is_idempotent(self, db):
        seed(db)
        assert seed(db) == 0
        assert db.query(User).count() == len(SAMPLE_USERS)
