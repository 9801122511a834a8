"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Message targets, media and the check constraint
- test_pagination.py: Cursor paging over threads
- test_read_state.py: Read flags, receipts and unread counts
- test_authorization.py: Group capabilities and creation rules
- test_services.py: Conversation, message and group services
- test_views.py: REST API endpoint tests
- test_integration.py: End-to-end messaging scenarios
- test_commands.py: check_chat_integrity management command

Usage:
    pytest chat/tests/
    pytest chat/tests/test_pagination.py
"""
