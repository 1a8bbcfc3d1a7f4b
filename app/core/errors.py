"""
Error taxonomy for the Job Board API.

Services raise these; handlers registered in app.main turn them into
`{success: false, message, code?, errors?}` JSON bodies.
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong"
    code: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message}
        if self.code:
            body["code"] = self.code
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"
    code = "validation_error"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(errors=[{"field": field, "message": message}])


# --- 401 ---

class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"
    code = "unauthorized"


class TokenMissing(AuthError):
    default_message = "No token, authorization denied"
    code = "token_missing"


class InvalidToken(AuthError):
    default_message = "Token is not valid"
    code = "token_invalid"


class TokenExpired(AuthError):
    default_message = "Token has expired"
    code = "token_expired"


class InvalidCredentials(AuthError):
    default_message = "Invalid email or password"
    code = "invalid_credentials"


# --- 403 / 404 / 409 ---

class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"
    code = "forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"
    code = "not_found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"
    code = "conflict"


class DuplicateEmail(Conflict):
    default_message = "User already exists with this email"
    code = "duplicate_email"


class DuplicateApplication(Conflict):
    default_message = "You have already applied for this job"
    code = "duplicate_application"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong!"
    code = "internal_error"
