"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        signin/                    - Email/password sign-in (returns bearer token)
        me/                        - Current user
    /api/v1/users/                 - User directory
        available/                 - Contacts the caller may message
    /api/v1/                       - Chat endpoints
        conversations/             - Direct thread list
        conversations/{user}/read/ - Mark thread read
        messages/                  - Send direct message
        messages/{user}/           - Direct thread page
        groups/                    - Group list/create
        groups/{id}/               - Group update/delete
        groups/{id}/messages/      - Group thread page/send
        groups/{id}/members/       - Add members
        groups/{id}/members/{user}/ - Remove member
    /api/v1/notifications/         - Push token slot
        register-token/            - Register device token
        unregister-token/          - Clear device token

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    path("auth/", include("authentication.urls")),
    path("users/", include("authentication.users_urls")),
    path("notifications/", include("notifications.urls")),
    # Chat routes sit at the API root (conversations/, messages/, groups/)
    path("", include("chat.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Messaging Admin"
admin.site.site_title = "Messaging Admin Portal"
admin.site.index_title = "Users, organizations and chat"
