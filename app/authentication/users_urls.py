"""
URL configuration for user directory endpoints.

URL structure:
    /api/v1/users/available/   - Users the caller may message (by role)
"""

from django.urls import path

from authentication.views import AvailableUsersView

app_name = "users"

urlpatterns = [
    path("available/", AvailableUsersView.as_view(), name="available"),
]
