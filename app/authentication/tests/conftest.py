"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(verified_user, client_for):
        response = client_for(verified_user).get("/api/v1/auth/me/")
        assert response.status_code == 200
"""

import pytest

from authentication.models import UserRole
from authentication.tests.factories import UserFactory


@pytest.fixture
def verified_user(db):
    """Verified volunteer with password TestPass123!."""
    return UserFactory(email="volunteer@example.com", email_verified=True)


@pytest.fixture
def users_by_role(db):
    """One verified user per role plus one without a role."""
    return {
        UserRole.VOLUNTEER: UserFactory(name="Val Volunteer", role=UserRole.VOLUNTEER),
        UserRole.ORGANIZATION: UserFactory(name="Olive Org", role=UserRole.ORGANIZATION),
        UserRole.ADMIN: UserFactory(name="Ada Admin", role=UserRole.ADMIN),
        UserRole.MENTOR: UserFactory(name="Max Mentor", role=UserRole.MENTOR),
        None: UserFactory(name="Nora Norole", role=None),
    }
