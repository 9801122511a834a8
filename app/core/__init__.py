"""
Core Application - Infrastructure & Base Classes

Generic infrastructure shared by the domain apps (authentication,
organizations, chat, notifications). No business rules live here.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - ErrorKind: Closed classification of expected failures
    - ServiceResult: Standard result wrapper for success/failure handling
    - BaseService: Base class for service layer (logger, atomic, validation)

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError / ConstraintViolationError / StoreUnavailableError

Exception handler (import from core.exception_handler):
    - api_exception_handler: DRF exception handler

Connection management (import from core.connection):
    - DatabaseConnectionManager: Bounded-retry connection establishment

View Mixins (import from core.viewset_mixins):
    - ServiceResponseMixin: Render failed ServiceResults with the right status

Helpers (import from core.helpers):
    - parse_positive_int: Lenient query parameter parsing
    - page_bounds / total_pages: Offset pagination arithmetic

Usage:
    from core.models import BaseModel
    from core.services import BaseService, ErrorKind, ServiceResult
    from core.exceptions import ValidationError
    from core.viewset_mixins import ServiceResponseMixin

Note:
    Models, the connection manager and view mixins are NOT imported here
    to avoid AppRegistryNotReady errors. Import them from their modules.
"""

# Services (no Django model dependencies)
from .services import BaseService, ErrorKind, ServiceResult

# Exceptions (no Django model dependencies)
from .exceptions import (
    BaseApplicationError,
    ConstraintViolationError,
    StoreUnavailableError,
    ValidationError,
)

# Helpers (no Django dependencies)
from .helpers import page_bounds, parse_positive_int, total_pages

__all__ = [
    # Services
    "BaseService",
    "ErrorKind",
    "ServiceResult",
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "ConstraintViolationError",
    "StoreUnavailableError",
    # Helpers
    "parse_positive_int",
    "page_bounds",
    "total_pages",
]
