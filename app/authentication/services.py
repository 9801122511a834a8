"""
Authentication services.

This module provides the account-level business logic:
- AccountService: Account provisioning with duplicate-email detection
- AuthService: Email/password sign-in issuing JWT access tokens
- ContactService: Role-based listing of users the caller may message

Related files:
    - models.py: User, UserRole
    - views.py: SignInView, MeView, AvailableUsersView

Security:
    - Passwords are verified with Django's check_password
    - Tokens are issued through rest_framework_simplejwt
    - Lookups are case-insensitive on email
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import IntegrityError
from django.db.models import Q
from django.utils import timezone
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import User, UserRole
from core.exceptions import ConstraintViolationError
from core.helpers import page_bounds, parse_positive_int, total_pages
from core.services import BaseService, ErrorKind, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet


# Which roles each role may see in the contacts listing.
VISIBLE_ROLES = {
    UserRole.VOLUNTEER: [UserRole.ADMIN, UserRole.MENTOR],
    UserRole.ADMIN: [UserRole.VOLUNTEER],
    UserRole.MENTOR: [UserRole.VOLUNTEER],
    UserRole.ORGANIZATION: [UserRole.VOLUNTEER],
}


@dataclass
class SignInResult:
    """Access token plus the signed-in user."""

    token: str
    user: User


@dataclass
class ContactPage:
    """One page of the contacts listing."""

    users: list[User]
    total: int
    total_pages: int
    page: int
    limit: int


class AccountService(BaseService):
    """
    Account provisioning.

    Signup itself happens outside this API; this is the store-level entry
    point used by provisioning scripts, the admin and tests.
    """

    @classmethod
    def create_account(
        cls,
        email: str,
        password: str | None = None,
        **fields,
    ) -> ServiceResult[User]:
        """
        Create a user, rejecting duplicate emails.

        Returns:
            ServiceResult with the new User, or a CONSTRAINT_VIOLATION
            failure (EMAIL_EXISTS) leaving the existing record untouched.
        """
        if User.objects.filter(email__iexact=email).exists():
            return ServiceResult.failure(
                "Email already registered",
                error_code="EMAIL_EXISTS",
                kind=ErrorKind.CONSTRAINT_VIOLATION,
            )

        try:
            with cls.atomic():
                user = User.objects.create_user(email=email, password=password, **fields)
        except (IntegrityError, ConstraintViolationError):
            # Lost a race with a concurrent signup for the same address
            cls.get_logger().info(f"Duplicate email rejected by store: {email}")
            return ServiceResult.failure(
                "Email already registered",
                error_code="EMAIL_EXISTS",
                kind=ErrorKind.CONSTRAINT_VIOLATION,
            )

        cls.get_logger().info(f"Created account {user.pk} with role {user.role}")
        return ServiceResult.success(user)


class AuthService(BaseService):
    """Email/password sign-in."""

    @classmethod
    def sign_in(cls, email: str, password: str) -> ServiceResult[SignInResult]:
        """
        Verify credentials and issue an access token.

        Checks run in a fixed order so clients get a precise reason:
        unknown email (404), unverified email (400), account without a
        password (400), wrong password (401).
        """
        logger = cls.get_logger()

        validation = cls.validate_required(email=email, password=password)
        if validation is not None:
            return validation

        user = (
            User.objects.select_related("organization_profile")
            .filter(email__iexact=email)
            .first()
        )
        if user is None:
            logger.info("Sign-in failed: unknown email")
            return ServiceResult.failure(
                "User not found. Please sign up first.",
                error_code="USER_NOT_FOUND",
                kind=ErrorKind.NOT_FOUND,
            )

        if not user.is_verified:
            logger.info(f"Sign-in failed: email not verified for user {user.pk}")
            return ServiceResult.failure(
                "Please verify your email first!",
                error_code="EMAIL_NOT_VERIFIED",
                kind=ErrorKind.VALIDATION,
            )

        if not user.has_password:
            logger.info(f"Sign-in failed: no password set for user {user.pk}")
            return ServiceResult.failure(
                "Invalid authentication method",
                error_code="NO_PASSWORD",
                kind=ErrorKind.VALIDATION,
            )

        if not user.check_password(password):
            logger.info(f"Sign-in failed: wrong password for user {user.pk}")
            return ServiceResult.failure(
                "Invalid email or password",
                error_code="INVALID_CREDENTIALS",
                kind=ErrorKind.UNAUTHENTICATED,
            )

        token = AccessToken.for_user(user)
        token["email"] = user.email

        user.last_seen = timezone.now()
        user.save(update_fields=["last_seen", "updated_at"])

        logger.info(f"User {user.pk} signed in (role={user.role})")
        return ServiceResult.success(SignInResult(token=str(token), user=user))


class ContactService(BaseService):
    """Who a user may start a conversation with."""

    @classmethod
    def visible_users(cls, user: User, search: str | None = None) -> QuerySet[User]:
        """
        Users visible to `user`, excluding themselves.

        Volunteers see admins and mentors. Admins, mentors and organizations
        see volunteers. Users without a role see nobody.
        """
        roles = VISIBLE_ROLES.get(user.role)
        if not roles:
            return User.objects.none()

        queryset = User.objects.filter(role__in=roles, is_active=True).exclude(pk=user.pk)
        if search:
            queryset = queryset.filter(Q(name__icontains=search) | Q(email__icontains=search))
        return queryset.order_by("name", "id")

    @classmethod
    def available_users(
        cls,
        user: User,
        search: str | None = None,
        page=None,
        limit=None,
    ) -> ServiceResult[ContactPage]:
        """
        Page through visible_users().

        page and limit accept raw query values; anything that is not a
        positive integer falls back to page 1 and CONTACTS_PAGE_SIZE.
        """
        page = parse_positive_int(page, default=1)
        limit = parse_positive_int(limit, default=settings.CONTACTS_PAGE_SIZE)

        queryset = cls.visible_users(user, search)
        total = queryset.count()
        start, end = page_bounds(page, limit)
        users = list(queryset[start:end])

        cls.get_logger().debug(
            f"Contacts for user {user.pk}: {len(users)} of {total} (page {page})"
        )
        return ServiceResult.success(
            ContactPage(
                users=users,
                total=total,
                total_pages=total_pages(total, limit),
                page=page,
                limit=limit,
            )
        )
