"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks.
"""

from django.http import JsonResponse

from core.connection import DatabaseConnectionManager


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Used by container health checks and load balancers. Performs a single
    database probe through DatabaseConnectionManager (no retries, so a
    probe never blocks on backoff).

    HTTP Status Codes:
        200: Database reachable
        503: Database unreachable

    Example Response:
        {
            "status": "healthy",
            "database": "connected"
        }
    """
    manager = DatabaseConnectionManager.from_settings()

    if manager.is_available():
        return JsonResponse({"status": "healthy", "database": "connected"})

    return JsonResponse(
        {"status": "unhealthy", "database": "disconnected"},
        status=503,
    )
