"""
Authentication models.

This module defines the user account model:
- UserRole: Closed enumeration of application roles
- User: Custom user model with email-based authentication

Related files:
    - managers.py: Custom user manager (email normalization, role validation)
    - services.py: AccountService, AuthService, ContactService
    - organizations.models: OrganizationProfile linked from User

Security:
    - Passwords hashed with Django's PBKDF2
    - Externally provisioned accounts have an unusable password
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower

from authentication.managers import UserManager


class UserRole(models.TextChoices):
    """
    Application role of a user.

    VOLUNTEER: Participant; may manage groups only as an opportunity mentor
    ORGANIZATION: Organization account; may create groups and start threads
    ADMIN: Platform administrator; full group management
    MENTOR: Mentor account; may start direct threads

    A NULL role means "not chosen yet". Any other value is rejected both by
    UserManager and by a database check constraint.
    """

    VOLUNTEER = "volunteer", "Volunteer"
    ORGANIZATION = "organization", "Organization"
    ADMIN = "admin", "Admin"
    MENTOR = "mentor", "Mentor"


class AuthProvider(models.TextChoices):
    """How the account was provisioned."""

    CREDENTIALS = "credentials", "Email and password"
    GOOGLE = "google", "Google"
    APPLE = "apple", "Apple"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        name: Display name
        email: Primary identifier, unique (case-insensitive), used for login
        provider: How the account was provisioned
        role: Application role (NULL when unset)
        image: Avatar URL
        email_verified: Whether the email address has been verified
        organization_profile: Profile for organization accounts
        last_seen: Updated on every successful sign-in
        expo_push_token: Single push token slot (overwritten on register)

    Usage:
        user = User.objects.create_user(
            email="user@example.com",
            password="securepassword",
            name="Jane",
            role=UserRole.VOLUNTEER,
        )
    """

    name = models.CharField(
        max_length=150,
        blank=True,
        default="",
        help_text="User's display name",
    )

    # Primary identifier (replaces username)
    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    provider = models.CharField(
        max_length=20,
        choices=AuthProvider.choices,
        default=AuthProvider.CREDENTIALS,
        help_text="How this account was provisioned",
    )

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        null=True,
        blank=True,
        db_index=True,
        help_text="Application role (null until chosen)",
    )

    image = models.URLField(
        max_length=500,
        blank=True,
        default="",
        help_text="Avatar URL",
    )

    email_verified = models.BooleanField(
        default=False,
        help_text="Whether the user's email has been verified",
    )

    organization_profile = models.ForeignKey(
        "organizations.OrganizationProfile",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
        help_text="Organization profile (organization accounts only)",
    )

    last_seen = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the user last signed in",
    )

    expo_push_token = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Expo push token for the user's current device (empty if none)",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    # Timestamps
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]
        constraints = [
            models.UniqueConstraint(
                Lower("email"),
                name="unique_user_email_case_insensitive",
            ),
            models.CheckConstraint(
                condition=Q(role__isnull=True) | Q(role__in=UserRole.values),
                name="user_role_in_enumeration",
            ),
        ]

    def __str__(self):
        return self.email

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name or self.email.split("@")[0]

    @property
    def is_verified(self) -> bool:
        """Alias used by the sign-in flow."""
        return self.email_verified

    @property
    def has_password(self) -> bool:
        """False for externally provisioned accounts."""
        return self.has_usable_password()

    @property
    def organization_title(self) -> str | None:
        if self.organization_profile_id is None:
            return None
        return self.organization_profile.title
