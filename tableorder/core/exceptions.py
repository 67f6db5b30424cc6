"""
Domain Exceptions

Every failure a handler can report maps to one of these classes. Each
carries the HTTP status it is rendered with and a user-facing message;
the exception handlers in tableorder.main turn them into {"error": ...}
bodies.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors rendered to the client."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(AppError):
    """Malformed request body or a value outside a fixed enumeration."""
    status_code = 400
    default_message = "Invalid input"


class Unauthorized(AppError):
    """Missing, invalid or expired credentials."""
    status_code = 401
    default_message = "Unauthorized"


class InvalidToken(Unauthorized):
    default_message = "Invalid token"


class TokenExpired(Unauthorized):
    default_message = "Token has expired"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    """Uniqueness constraint violation."""
    status_code = 409
    default_message = "Conflict"


class Unavailable(AppError):
    """Menu item exists but cannot be ordered."""
    status_code = 400
    default_message = "Menu item is not available"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal Server Error"
