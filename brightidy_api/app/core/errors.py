"""
Error taxonomy shared by the service layer and the HTTP layer.

Services raise the exceptions below; ``main.create_app`` installs a
handler that renders any ``ApiError`` as ``{"error": <message>}`` with
the exception's ``status_code``.
"""

from fastapi import status


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(ApiError):
    """A unique value is already taken (reported as a bad request)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class AuthError(ApiError):
    """Wrong username or password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class UnauthenticatedError(ApiError):
    """Missing, malformed or unknown bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorised"


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(ApiError):
    pass


class StorageError(InternalError):
    """The persisted document could not be read or written."""

    default_message = "Database unavailable"
