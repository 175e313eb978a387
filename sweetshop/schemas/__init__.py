"""Pydantic schemas for API requests and responses."""

from sweetshop.schemas.auth import (
    AuthResponse,
    UserDetailResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from sweetshop.schemas.sweet import (
    MessageResponse,
    RestockRequest,
    StockChangeResponse,
    SweetCreate,
    SweetResponse,
    SweetUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "UserDetailResponse",
    "AuthResponse",
    "SweetCreate",
    "SweetUpdate",
    "SweetResponse",
    "RestockRequest",
    "StockChangeResponse",
    "MessageResponse",
]
