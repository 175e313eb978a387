"""FastAPI dependencies for authentication, authorization and services.

Protected routes run these as ordered stages: ``get_current_user`` resolves the
bearer token to a user, then ``require_admin`` (which depends on it, so it can
never run on its own) checks the role. Each stage either hands its result to
the next one or raises a terminal error.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sweetshop.config import Settings, get_settings
from sweetshop.database import get_db
from sweetshop.exceptions import Forbidden, Unauthenticated
from sweetshop.models.user import User
from sweetshop.services.auth import AuthService, TokenService
from sweetshop.services.inventory import InventoryService

# auto_error=False so a missing header becomes our 401 rather than FastAPI's default
security = HTTPBearer(auto_error=False)


def get_token_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenService:
    """Get token service configured from settings."""
    return TokenService(settings)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, token_service, settings)


def get_inventory_service(
    db: Annotated[Session, Depends(get_db)],
) -> InventoryService:
    """Get inventory service with dependencies."""
    return InventoryService(db)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    user_id = token_service.verify(credentials.credentials)

    user = auth_service.get_user(user_id)
    if user is None:
        raise Unauthenticated("User not found")

    request.state.user = user
    return user


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Allow only users with the admin role."""
    if not current_user.is_admin:
        raise Forbidden()
    return current_user
