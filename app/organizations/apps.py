"""
Django app configuration for organizations.
"""

from django.apps import AppConfig


class OrganizationsConfig(AppConfig):
    """Configuration for the organizations application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "organizations"
    verbose_name = "Organizations"
