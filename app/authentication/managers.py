"""
Custom user manager for email-based authentication.

This module provides the UserManager class that handles user creation
with email as the primary identifier instead of username.

Related files:
    - models.py: User model that uses this manager

Security:
    - Passwords are automatically hashed via set_password()
    - Email addresses are normalized (lowercase domain)
    - Roles outside UserRole are rejected before hitting the database
    - Duplicate emails (any case) are rejected before hitting the database
"""

from django.contrib.auth.models import BaseUserManager

from core.exceptions import ConstraintViolationError, ValidationError


class UserManager(BaseUserManager):
    """
    Custom manager for User model with email-based authentication.

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword',
            role='volunteer',
        )

        admin = User.objects.create_superuser(
            email='admin@example.com',
            password='adminpassword'
        )
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user with the given email and password.

        Args:
            email: User's email address (required)
            password: User's password (optional for externally provisioned users)
            **extra_fields: Additional fields to set on the user

        Returns:
            User: The created user instance

        Raises:
            ValueError: If email is not provided
            core.exceptions.ValidationError: If role is not a known UserRole
            core.exceptions.ConstraintViolationError: If the email is taken,
                compared case-insensitively
        """
        from authentication.models import UserRole

        if not email:
            raise ValueError("The Email field must be set")

        email = self.normalize_email(email)

        role = extra_fields.get("role")
        if role is not None and role not in UserRole.values:
            raise ValidationError(
                f"Unknown role '{role}'",
                error_code="INVALID_ROLE",
                details={"role": role, "allowed": list(UserRole.values)},
            )

        if self.filter(email__iexact=email).exists():
            raise ConstraintViolationError(
                "Email already registered",
                error_code="EMAIL_EXISTS",
                details={"email": email},
            )

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser with the given email and password.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("email_verified", True)
        extra_fields.setdefault("role", "admin")

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)
