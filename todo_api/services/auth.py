import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, SECRET_KEY
from ..errors import ConflictError, NotFoundError, UnauthorizedError
from ..models import User
from ..schemas.user import AuthResponse, User as UserSchema, UserCreate

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    hashed_bytes = hashed_password.encode("utf-8") if isinstance(hashed_password, str) else hashed_password
    return bcrypt.checkpw(_password_bytes(plain_password), hashed_bytes)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt directly."""
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt())
    return hashed.decode("utf-8")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[int]:
    """Return the user id carried by a valid token, or None."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None


class AuthService:
    """Registration, login and token verification."""

    invalid_credentials = "Invalid credentials"
    invalid_token = "Could not validate credentials"

    def __init__(self, db: Session):
        self.db = db

    def register(self, user_in: UserCreate) -> User:
        existing = (
            self.db.query(User)
            .filter(or_(User.username == user_in.username, User.email == user_in.email))
            .first()
        )
        if existing:
            raise ConflictError("Username or email already exists")

        user = User(
            username=user_in.username,
            email=user_in.email,
            hashed_password=get_password_hash(user_in.password),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent registration
            self.db.rollback()
            raise ConflictError("Username or email already exists")
        self.db.refresh(user)

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    def login(self, username: str, password: str) -> AuthResponse:
        user = self.db.query(User).filter(User.username == username).first()
        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Failed login for username %r", username)
            raise UnauthorizedError(self.invalid_credentials)

        access_token = create_access_token(data={"sub": str(user.id)})
        logger.info("User %s logged in", user.id)
        return AuthResponse(access_token=access_token, user=UserSchema.model_validate(user))

    def authenticate(self, token: Optional[str]) -> int:
        """Resolve a session token to the caller's user id."""
        if not token:
            raise UnauthorizedError(self.invalid_token)

        user_id = decode_access_token(token)
        if user_id is None or self.db.get(User, user_id) is None:
            raise UnauthorizedError(self.invalid_token)
        return user_id

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
