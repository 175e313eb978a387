"""SQLAlchemy models."""

from sweetshop.models.enums import UserRole
from sweetshop.models.sweet import Sweet
from sweetshop.models.user import User

__all__ = [
    "User",
    "UserRole",
    "Sweet",
]
