"""
URL configuration for notifications API.

Routes:
    /register-token/      - Register push token (POST)
    /unregister-token/    - Clear push token (POST)
"""

from django.urls import path

from notifications.views import RegisterTokenView, UnregisterTokenView

app_name = "notifications"

urlpatterns = [
    path("register-token/", RegisterTokenView.as_view(), name="register-token"),
    path("unregister-token/", UnregisterTokenView.as_view(), name="unregister-token"),
]
