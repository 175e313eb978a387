"""User model."""

from sqlalchemy import Column, Integer, String

from sweetshop.database import Base
from sweetshop.models.enums import UserRole
from sweetshop.models.mixins import TimestampMixin
from sweetshop.security import get_password_hash, verify_password


class User(Base, TimestampMixin):
    """User account for authentication and role checks."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)  # "user" | "admin"

    def set_password(self, password: str) -> None:
        """Hash and store a new password.

        The hash is computed once here; flushing the row again never re-hashes it.
        """
        self.password_hash = get_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Compare a candidate password against the stored hash."""
        return verify_password(password, self.password_hash)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
