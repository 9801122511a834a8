"""
Tests for the User model and UserManager.

Covers:
- Role enumeration enforced by the manager and by the database
- Case-insensitive email uniqueness at the store level
- Password handling for externally provisioned accounts
- Convenience properties used by sign-in and conversation summaries
"""

import pytest
from django.db import IntegrityError, transaction

from authentication.models import User, UserRole
from authentication.tests.factories import UserFactory
from core.exceptions import ConstraintViolationError, ValidationError
from organizations.tests.factories import OrganizationProfileFactory


class TestUserRole:
    def test_create_user_rejects_unknown_role(self, db):
        """
        Unknown roles never reach the database.

        Why it matters: Every permission rule switches on role; a stray
        value would silently fall through all of them.
        """
        with pytest.raises(ValidationError) as exc_info:
            User.objects.create_user(email="x@example.com", role="superhero")

        assert exc_info.value.error_code == "INVALID_ROLE"
        assert not User.objects.filter(email="x@example.com").exists()

    def test_role_may_be_unset(self, db):
        user = UserFactory(role=None)

        assert user.role is None

    def test_database_rejects_unknown_role(self, db):
        """Bulk updates bypass the manager; the check constraint still holds."""
        user = UserFactory()

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                User.objects.filter(pk=user.pk).update(role="superhero")

    @pytest.mark.parametrize("role", UserRole.values)
    def test_every_known_role_is_accepted(self, db, role):
        assert UserFactory(role=role).role == role


class TestEmailUniqueness:
    def test_create_user_rejects_duplicate_email(self, db):
        original = UserFactory(email="dup@example.com")

        with pytest.raises(ConstraintViolationError) as exc_info:
            User.objects.create_user(email="DUP@example.com", password="x")

        assert exc_info.value.error_code == "EMAIL_EXISTS"
        assert list(User.objects.values_list("pk", flat=True)) == [original.pk]

    def test_duplicate_email_rejected_by_store(self, db):
        """Writes that skip the manager still hit the unique index."""
        UserFactory(email="dup@example.com")

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                User(email="dup@example.com").save()

    def test_email_uniqueness_ignores_case(self, db):
        """
        Addresses differing only in case collide.

        Why it matters: Sign-in looks emails up case-insensitively, so two
        such rows would make sign-in ambiguous.
        """
        UserFactory(email="Case@example.com")

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                User(email="case@example.com").save()


class TestUserProperties:
    def test_user_without_password_has_no_usable_password(self, db):
        user = UserFactory(password=None)

        assert user.has_password is False

    def test_user_with_password(self, db):
        user = UserFactory(password="s3cret-pass")

        assert user.has_password is True
        assert user.check_password("s3cret-pass")

    def test_is_verified_mirrors_email_verified(self, db):
        assert UserFactory(email_verified=True).is_verified is True
        assert UserFactory(email_verified=False).is_verified is False

    def test_organization_title(self, db):
        profile = OrganizationProfileFactory(title="Harbour Care")
        user = UserFactory(role=UserRole.ORGANIZATION, organization_profile=profile)

        assert user.organization_title == "Harbour Care"
        assert UserFactory().organization_title is None

    def test_create_superuser_defaults(self, db):
        admin = User.objects.create_superuser(email="root@example.com", password="pw")

        assert admin.is_staff and admin.is_superuser
        assert admin.role == UserRole.ADMIN
        assert admin.email_verified is True
