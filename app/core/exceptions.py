"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- HTTP status codes carried by each error class

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures
    ├── ConstraintViolationError - Uniqueness/invariant rejected by the store (409)
    └── StoreUnavailableError - Database unreachable after retries (503)

Usage:
    from core.exceptions import ConstraintViolationError, ValidationError

    # Raise with message only
    raise ValidationError("Message must target exactly one of receiver or group")

    # Raise with error code for client handling
    raise ConstraintViolationError("Email already registered", error_code="EMAIL_EXISTS")

Note:
    These exceptions are for domain/business logic errors raised outside the
    ServiceResult flow (model boundaries, infrastructure). DRF handles
    API-layer exceptions (serialization, authentication, etc.), and
    core.exception_handler.api_exception_handler renders both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import status

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        status_code: HTTP status used when the error reaches a view
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Group not found",
                "error_code": "GROUP_NOT_FOUND",
                "details": {"group_id": 12}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - A message built with both or neither of receiver and group
    - A role outside the closed enumeration
    - Empty list fields on an organization profile
    """

    default_error_code: str = "VALIDATION_ERROR"


class ConstraintViolationError(BaseApplicationError):
    """
    Raised when the store rejects a write that breaks a uniqueness rule.

    Example:
        raise ConstraintViolationError(
            "Volunteer is already a mentor for this opportunity",
            error_code="MENTOR_ALREADY_ASSIGNED",
            details={"opportunity_id": opportunity_id},
        )
    """

    default_error_code: str = "CONSTRAINT_VIOLATION"
    status_code: int = status.HTTP_409_CONFLICT


class StoreUnavailableError(BaseApplicationError):
    """Raised when the database cannot be reached after exhausting retries."""

    default_error_code: str = "STORE_UNAVAILABLE"
    status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE

