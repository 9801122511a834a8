"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ErrorKind: Closed classification of expected failures
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - ServiceResult: Use for expected failures (validation, business rules)
    - Exceptions: Use for unexpected failures (database errors, bugs)

Usage:
    from core.services import BaseService, ErrorKind, ServiceResult

    class GroupService(BaseService):
        @classmethod
        def delete_group(cls, actor, group_id) -> ServiceResult[None]:
            group = Group.objects.filter(pk=group_id).first()
            if group is None:
                return ServiceResult.failure(
                    "Group not found",
                    error_code="GROUP_NOT_FOUND",
                    kind=ErrorKind.NOT_FOUND,
                )

            with cls.atomic():
                group.messages.all().delete()
                group.delete()

            cls.get_logger().info(f"Deleted group {group_id}")
            return ServiceResult.success(None)

    # In view (see core.viewset_mixins.ServiceResponseMixin)
    result = GroupService.delete_group(request.user, pk)
    if not result.success:
        return self.failure_response(result)

Related:
    - core.exceptions: For unexpected/exceptional errors
    - core.viewset_mixins: Mapping of ErrorKind to HTTP status
"""

from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


class ErrorKind(enum.Enum):
    """
    Classification of an expected failure.

    Every failed ServiceResult carries exactly one kind. The HTTP layer maps
    kinds to status codes; services never deal with status codes directly.

    VALIDATION: Malformed or missing input (400)
    NOT_FOUND: Referenced user or group does not exist (404)
    PERMISSION_DENIED: Role or relationship check failed (403)
    CONSTRAINT_VIOLATION: Write rejected by a uniqueness or state rule (409)
    INFRASTRUCTURE: The store could not be reached (503)
    UNAUTHENTICATED: Credentials rejected at sign-in (401)
    """

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    CONSTRAINT_VIOLATION = "constraint_violation"
    INFRASTRUCTURE = "infrastructure"
    UNAUTHENTICATED = "unauthenticated"


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, business rule violations).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        kind: ErrorKind classification (None if successful)
        errors: Field-level errors for validation failures

    Usage:
        # Success case
        return ServiceResult.success(page)

        # Failure case
        return ServiceResult.failure(
            "Only group admins can remove members",
            error_code="NOT_GROUP_MANAGER",
            kind=ErrorKind.PERMISSION_DENIED,
        )

        # Validation errors with field details
        return ServiceResult.failure(
            "Validation failed",
            error_code="VALIDATION_ERROR",
            errors={"receiverId": ["This field is required."]},
        )
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    kind: ErrorKind | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        kind: ErrorKind = ErrorKind.VALIDATION,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            kind: Failure classification (defaults to VALIDATION)
            errors: Field-level errors (for validation failures)

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            kind=kind,
            errors=errors,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert a failure to the API error body.

        Returns:
            Dict with error, error_code and (optionally) errors keys
        """
        response: dict[str, Any] = {"error": self.error}
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def map(self, func) -> ServiceResult:
        """
        Transform the data if successful.

        Example:
            result = GroupService.create_group(actor, data)
            serialized = result.map(lambda g: GroupSerializer(g).data)
        """
        if self.success and self.data is not None:
            return ServiceResult.success(func(self.data))
        return self  # type: ignore

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management
    - Required-field validation

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back.

        Example:
            with cls.atomic():
                group.messages.all().delete()
                group.delete()
                # If the group delete fails, the messages come back
        """
        with transaction.atomic():
            yield

    @classmethod
    def validate_required(cls, **kwargs) -> ServiceResult | None:
        """
        Validate that required fields are provided.

        Returns a failure result if any required field is None or empty.
        Returns None if all fields are valid.

        Example:
            validation = cls.validate_required(receiverId=receiver_id)
            if validation is not None:
                return validation
        """
        errors = {}
        for field_name, value in kwargs.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field_name] = ["This field is required."]

        if errors:
            missing = ", ".join(errors)
            return ServiceResult.failure(
                f"Required fields missing: {missing}",
                error_code="VALIDATION_ERROR",
                kind=ErrorKind.VALIDATION,
                errors=errors,
            )
        return None
