# taskvibe/core/exceptions.py
from typing import Any, Dict, Optional

from fastapi import status


class BusinessException(Exception):
    """Base exception for business rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "business_error"

    def __init__(
        self, message: str, code: str = None, details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFoundException(BusinessException):
    """
    Raised when a requested resource does not exist.

    Also raised when the resource exists but belongs to another user, so
    callers cannot probe for other users' ids.
    """

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "resource_not_found"


class ValidationException(BusinessException):
    """Exception raised when input validation fails."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = "validation_error"


class AuthenticationException(BusinessException):
    """Exception raised when no valid session token is presented."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "authentication_error"
