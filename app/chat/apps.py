"""
Chat application configuration.

This app provides messaging with:
- Direct (1:1) threads derived from messages
- Groups with members, admins and opportunity mentors
- Cursor-paginated thread history
- Read flags, read receipts and unread counts
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
