"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from sweetshop.api.dependencies import get_auth_service, get_current_user
from sweetshop.models.user import User
from sweetshop.schemas.auth import (
    AuthResponse,
    UserDetailResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from sweetshop.services.auth import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    user, token = auth_service.register(user_data.username, user_data.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with username and password."""
    user, token = auth_service.login(credentials.username, credentials.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserDetailResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
