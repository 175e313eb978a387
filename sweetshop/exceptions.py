"""Domain errors raised by services and the auth dependencies.

Each error knows the HTTP status it maps to; the handlers in ``sweetshop.main``
turn them into ``{"error": {"message": ...}}`` responses.
"""

from fastapi import status


class SweetShopError(Exception):
    """Base class for errors that map to a client-facing response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthenticated(SweetShopError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authorized to access this route"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidToken(Unauthenticated):
    message = "Not authorized, token failed"


class InvalidCredentials(SweetShopError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(SweetShopError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied: Admins only"


class NotFound(SweetShopError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not Found"


class DuplicateUsername(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Username already taken"


class DuplicateItem(SweetShopError):
    status_code = status.HTTP_409_CONFLICT
    message = "A sweet with this name already exists in this category"


class OutOfStock(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Out of stock!"


class MissingQuery(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Search query required"


class InvalidAmount(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Valid quantity required"


class StockLimitExceeded(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Restock would exceed the maximum stock level"


class ValidationError(SweetShopError):
    """Request body or field constraint violation."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    message = "Validation failed"

    def __init__(self, message: str | None = None, details: list | None = None):
        super().__init__(message)
        self.details = details or []


class InternalError(SweetShopError):
    """Unexpected store or infrastructure failure."""
