from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from datetime import datetime

class UserBase(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr

class UserCreate(UserBase):
    password: str = Field(min_length=6)

class UserLogin(BaseModel):
    username: str
    password: str

class User(BaseModel):
    """Public user profile; the password hash is never part of it."""
    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
