"""
Test configuration and fixtures for chat tests.

Fixtures:
    organization: Organization-role user
    admin: Admin-role user
    mentor: Mentor-role user
    volunteer / other_volunteer: Volunteer-role users
    group: Group created by `organization` with `volunteer` as a member
"""

import pytest

from authentication.models import UserRole
from authentication.tests.factories import UserFactory
from chat.tests.factories import GroupFactory


@pytest.fixture
def organization(db):
    return UserFactory(name="Olive Org", role=UserRole.ORGANIZATION)


@pytest.fixture
def admin(db):
    return UserFactory(name="Ada Admin", role=UserRole.ADMIN)


@pytest.fixture
def mentor(db):
    return UserFactory(name="Max Mentor", role=UserRole.MENTOR)


@pytest.fixture
def volunteer(db):
    return UserFactory(name="Val Volunteer", role=UserRole.VOLUNTEER)


@pytest.fixture
def other_volunteer(db):
    return UserFactory(name="Vic Volunteer", role=UserRole.VOLUNTEER)


@pytest.fixture
def group(organization, volunteer):
    return GroupFactory(name="Beach clean-up", created_by=organization, members=[volunteer])
