"""Authentication services: JWT tokens and user credentials."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, defer

from sweetshop.config import Settings
from sweetshop.exceptions import DuplicateUsername, InvalidCredentials, InvalidToken
from sweetshop.models.enums import UserRole
from sweetshop.models.user import User

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies signed, time-limited access tokens."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)

    def issue(self, user_id: int, expires_delta: timedelta | None = None) -> str:
        """Create a JWT access token for a user."""
        expire = datetime.now(UTC) + (expires_delta or self.expires_delta)
        to_encode = {
            "sub": str(user_id),
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Decode a token and return the user id it was issued for.

        Raises InvalidToken if the signature is wrong, the token has expired,
        or the payload does not carry an integer subject.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken() from e

        sub = payload.get("sub")
        if sub is None:
            raise InvalidToken()
        try:
            return int(sub)
        except (TypeError, ValueError) as e:
            raise InvalidToken() from e


class AuthService:
    """Registration, login and admin bootstrap."""

    def __init__(self, db: Session, token_service: TokenService, settings: Settings):
        self.db = db
        self.token_service = token_service
        self.admin_usernames = {name.strip().lower() for name in settings.admin_usernames}

    def resolve_role(self, username: str) -> UserRole:
        """Pick the role a new account gets."""
        if username.strip().lower() in self.admin_usernames:
            return UserRole.ADMIN
        return UserRole.USER

    def get_user_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def get_user(self, user_id: int) -> User | None:
        """Get a user by id without loading the password hash."""
        return (
            self.db.query(User)
            .options(defer(User.password_hash))
            .filter(User.id == user_id)
            .first()
        )

    def register(self, username: str, password: str) -> tuple[User, str]:
        """Create a user and return it with a fresh token."""
        if self.get_user_by_username(username):
            raise DuplicateUsername()

        role = self.resolve_role(username)
        user = User(username=username, role=role.value)
        user.set_password(password)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUsername() from e
        self.db.refresh(user)

        logger.info(f"Registered user '{user.username}' with role {user.role}")
        return user, self.token_service.issue(user.id)

    def login(self, username: str, password: str) -> tuple[User, str]:
        """Check credentials and return the user with a fresh token."""
        user = self.get_user_by_username(username.strip())
        if not user or not user.check_password(password):
            logger.info(f"Failed login for '{username}'")
            raise InvalidCredentials()
        return user, self.token_service.issue(user.id)

    def bootstrap_admin(self, username: str, password: str) -> User:
        """Create an admin account, or promote an existing user and reset their password."""
        username = username.strip()
        user = self.get_user_by_username(username)
        if user is None:
            user = User(username=username)
            self.db.add(user)
            logger.info(f"Creating admin '{username}'")
        else:
            logger.info(f"Promoting existing user '{username}' to admin")
        user.role = UserRole.ADMIN.value
        user.set_password(password)
        self.db.commit()
        self.db.refresh(user)
        return user
