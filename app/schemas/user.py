"""
Pydantic schemas for users and authentication.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional

from app.schemas.common import CamelModel, reject_null


class CurrentUser(BaseModel):
    """Identity extracted from a bearer token."""
    username: str
    is_admin: bool = False


class UserRegisterRequest(CamelModel):
    """Request schema for self-registration (never creates an admin)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr

    class Config:
        extra = "forbid"


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins creating users."""
    is_admin: bool = False


class UserUpdateRequest(CamelModel):
    """Partial user update. The username cannot be changed."""
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = None

    @field_validator("password", "first_name", "last_name", "email", "is_admin")
    @classmethod
    def fields_not_null(cls, v):
        return reject_null(v)

    class Config:
        extra = "forbid"


class UserLoginRequest(BaseModel):
    """Request schema for login."""
    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"


class UserResponse(CamelModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserEnvelope(CamelModel):
    user: UserResponse


class UserCreatedResponse(BaseModel):
    user: UserResponse
    access_token: str


class UserListEnvelope(CamelModel):
    users: List[UserResponse]
