"""Application error hierarchy."""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base error rendered as a JSON error response."""

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"


class ConflictError(AppError):
    status_code = 409
    error_code = "conflict"


class ValidationError(AppError):
    status_code = 422
    error_code = "validation_error"


class AuthenticationError(AppError):
    """Raised when a request carries no valid listener identity."""

    status_code = 401
    error_code = "not_authenticated"
    message = "You need to log in first!"

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(self.message, details)
