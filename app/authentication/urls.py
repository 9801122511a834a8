"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/signin/   - Email/password sign-in (no auth)
    /api/v1/auth/me/       - Current user

The contacts listing (/api/v1/users/available/) lives in users_urls.py so
it can be mounted under its own prefix.
"""

from django.urls import path

from authentication.views import MeView, SignInView

app_name = "authentication"

urlpatterns = [
    path("signin/", SignInView.as_view(), name="signin"),
    path("me/", MeView.as_view(), name="me"),
]
