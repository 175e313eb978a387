"""Authentication schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)]


class UserRegister(BaseModel):
    """User registration request."""

    username: Username
    password: str = Field(..., min_length=6, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class UserDetailResponse(UserResponse):
    """Current user, including when the account was created."""

    created_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    success: bool = True
    token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
