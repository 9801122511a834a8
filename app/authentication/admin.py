"""
Django admin configuration for authentication models.

Related files:
    - models.py: Model definitions
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for User model.

    Customized for email-based authentication with application roles.
    """

    list_display = (
        "email",
        "name",
        "role",
        "email_verified",
        "is_active",
        "last_seen",
    )
    list_filter = (
        "role",
        "provider",
        "is_active",
        "is_staff",
        "email_verified",
    )
    search_fields = ("email", "name")
    ordering = ("-date_joined",)
    raw_id_fields = ("organization_profile",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Identity", {"fields": ("name", "image", "role", "provider", "organization_profile")}),
        (
            "Status",
            {"fields": ("email_verified", "is_active", "is_staff", "is_superuser")},
        ),
        ("Devices", {"fields": ("expo_push_token",)}),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("date_joined", "last_login", "last_seen")},
        ),
    )
    readonly_fields = ("date_joined", "last_login", "last_seen")

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "name", "role", "password1", "password2"),
            },
        ),
    )
