"""
Authentication application.

Email/password sign-in with bearer tokens, the custom User model with its
closed role enumeration, and the contact directory used to start chats.

Key components:
    - User model: Email-based user with role and organization link
    - AccountService: Account creation with duplicate-email detection
    - AuthService: Sign-in and token issue
    - ContactService: Role-based list of users the caller may message

Usage:
    from authentication.models import User, UserRole
    from authentication.services import AuthService
"""
