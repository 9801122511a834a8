"""
DRF exception handler for application errors.

Registered as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Kept apart from
core.exceptions so models can import the exception classes without
loading DRF's view machinery.
"""

import logging

from django.db import InterfaceError, OperationalError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError, StoreUnavailableError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Falls back to DRF's default handler first, then renders
    BaseApplicationError subclasses with their own status, and reports lost
    database connections as 503. Anything else returns None so DRF
    re-raises it.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, BaseApplicationError):
        if exc.status_code >= 500:
            logger.error(f"Application error in {context.get('view')}: {exc}")
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, (OperationalError, InterfaceError)):
        logger.error(f"Database unavailable: {exc}")
        error = StoreUnavailableError("Service temporarily unavailable")
        return Response(error.to_dict(), status=error.status_code)

    return None
