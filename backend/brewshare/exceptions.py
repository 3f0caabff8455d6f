"""Application exceptions

Every exception carries its HTTP status so route handlers and services can
raise them directly; the handler registered in ``main`` turns them into
JSON responses.
"""

from typing import Optional

from fastapi import HTTPException, status


class BrewshareException(HTTPException):
    """Base class for all application errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"
    headers = None

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.detail,
            headers=self.headers,
        )


class AuthenticationRequired(BrewshareException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authentication required"


class InvalidToken(AuthenticationRequired):
    detail = "Invalid or expired token"


class Forbidden(BrewshareException):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Not authorized to perform this action"


class NotFound(BrewshareException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"


class ValidationError(BrewshareException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request"
