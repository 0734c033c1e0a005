from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.user import AuthResponse, User as UserSchema, UserCreate, UserLogin
from ..services.auth import AuthService

router = APIRouter()


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def _get_token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return None


def get_current_user_id(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> int:
    """Guard for protected routes: the authenticated caller's user id."""
    return auth_service.authenticate(_get_token_from_request(request))


@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register(
    user: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create a new user account."""
    return auth_service.register(user)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Log in and get a JWT access token."""
    return auth_service.login(credentials.username, credentials.password)


@router.get("/me", response_model=UserSchema)
def read_users_me(
    current_user_id: int = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get current user information."""
    return auth_service.get_user(current_user_id)
