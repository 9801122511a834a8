"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User model, roles and manager tests
- test_services.py: AccountService, AuthService, ContactService tests
- test_views.py: API endpoint tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_models.py
"""
