"""
View mixins for common DRF functionality.

This module provides generic, non-domain-specific mixins for views:
- ServiceResponseMixin: Render failed ServiceResults with the right status

Usage:
    from core.viewset_mixins import ServiceResponseMixin

    class GroupDetailView(ServiceResponseMixin, APIView):
        def delete(self, request, group_id):
            result = GroupService.delete_group(request.user, group_id)
            if not result.success:
                return self.failure_response(result)
            return Response({"success": True})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rest_framework import status
from rest_framework.response import Response

from core.services import ErrorKind

if TYPE_CHECKING:
    from core.services import ServiceResult

logger = logging.getLogger(__name__)


ERROR_KIND_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONSTRAINT_VIOLATION: status.HTTP_409_CONFLICT,
    ErrorKind.INFRASTRUCTURE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
}


class ServiceResponseMixin:
    """
    Translate ServiceResult failures into DRF responses.

    The status code comes from the result's ErrorKind; the body is
    result.to_response(), i.e. {"error", "error_code", "errors"?}.
    """

    def failure_response(self, result: ServiceResult) -> Response:
        status_code = ERROR_KIND_STATUS.get(result.kind, status.HTTP_400_BAD_REQUEST)
        if status_code >= 500:
            logger.error(f"{self.__class__.__name__}: {result.error_code} {result.error}")
        return Response(result.to_response(), status=status_code)
