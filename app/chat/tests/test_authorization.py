"""
Tests for GroupAuthorizationService.

Covers:
- Relationship detection (creator, group admin, member, mentor, outsider)
- The single management predicate behind update/delete/add/remove
- Group creation rules
- Who may open a new direct thread
"""

import pytest

from authentication.models import UserRole
from authentication.tests.factories import UserFactory
from chat.authorization import GroupAuthorizationService, GroupRelationship
from chat.tests.factories import DirectMessageFactory, GroupFactory, GroupMessageFactory
from core.services import ErrorKind
from organizations.tests.factories import OpportunityMentorFactory


@pytest.fixture
def opportunity_group(organization, volunteer):
    return GroupFactory(created_by=organization, members=[volunteer], opportunity_id="opp-1")


class TestRelationships:
    def test_creator_is_creator_admin_and_member(self, group, organization):
        relationships = GroupAuthorizationService.relationships(organization, group)

        assert relationships == {
            GroupRelationship.CREATOR,
            GroupRelationship.GROUP_ADMIN,
            GroupRelationship.MEMBER,
        }

    def test_plain_member(self, group, volunteer):
        assert GroupAuthorizationService.relationships(volunteer, group) == {
            GroupRelationship.MEMBER
        }

    def test_outsider(self, group, other_volunteer):
        assert GroupAuthorizationService.relationships(other_volunteer, group) == {
            GroupRelationship.NON_MEMBER
        }

    def test_opportunity_mentor(self, opportunity_group, other_volunteer):
        OpportunityMentorFactory(opportunity_id="opp-1", volunteer=other_volunteer)

        relationships = GroupAuthorizationService.relationships(
            other_volunteer, opportunity_group
        )

        assert GroupRelationship.OPPORTUNITY_MENTOR in relationships
        assert GroupRelationship.NON_MEMBER in relationships

    def test_mentor_of_other_opportunity_is_not_opportunity_mentor(
        self, opportunity_group, other_volunteer
    ):
        OpportunityMentorFactory(opportunity_id="opp-2", volunteer=other_volunteer)

        relationships = GroupAuthorizationService.relationships(
            other_volunteer, opportunity_group
        )

        assert GroupRelationship.OPPORTUNITY_MENTOR not in relationships

    def test_group_without_opportunity_has_no_mentors(self, group, other_volunteer):
        OpportunityMentorFactory(volunteer=other_volunteer)

        relationships = GroupAuthorizationService.relationships(other_volunteer, group)

        assert GroupRelationship.OPPORTUNITY_MENTOR not in relationships


class TestManagementPredicate:
    """
    One predicate governs update, delete and membership changes.

    Why it matters: Endpoints that disagree on who can manage a group let
    a user do through one route what another route forbids.
    """

    @pytest.mark.parametrize(
        "role,expected",
        [
            (UserRole.ADMIN, True),
            (UserRole.ORGANIZATION, True),
            (UserRole.MENTOR, False),
            (UserRole.VOLUNTEER, False),
            (None, False),
        ],
    )
    def test_outsider_by_role(self, opportunity_group, role, expected):
        actor = UserFactory(role=role)

        capabilities = GroupAuthorizationService.capabilities_for(actor, opportunity_group)

        assert capabilities.can_update is expected
        assert capabilities.can_delete is expected
        assert capabilities.can_manage_members is expected
        assert not capabilities.is_member

    def test_plain_member_cannot_manage(self, opportunity_group, volunteer):
        capabilities = GroupAuthorizationService.capabilities_for(volunteer, opportunity_group)

        assert capabilities.is_member
        assert not capabilities.can_manage_members

    def test_group_admin_can_manage(self, organization, volunteer):
        group = GroupFactory(created_by=organization, admins=[volunteer])

        capabilities = GroupAuthorizationService.capabilities_for(volunteer, group)

        assert capabilities.can_manage_members
        assert capabilities.can_delete

    def test_volunteer_creator_can_manage(self, volunteer):
        group = GroupFactory(created_by=volunteer)

        assert GroupAuthorizationService.capabilities_for(volunteer, group).can_update

    def test_opportunity_mentor_can_manage_without_membership(
        self, opportunity_group, other_volunteer
    ):
        OpportunityMentorFactory(opportunity_id="opp-1", volunteer=other_volunteer)

        capabilities = GroupAuthorizationService.capabilities_for(
            other_volunteer, opportunity_group
        )

        assert capabilities.can_manage_members
        assert not capabilities.is_member

    def test_mentor_of_other_opportunity_cannot_manage(
        self, opportunity_group, other_volunteer
    ):
        OpportunityMentorFactory(opportunity_id="opp-2", volunteer=other_volunteer)

        capabilities = GroupAuthorizationService.capabilities_for(
            other_volunteer, opportunity_group
        )

        assert not capabilities.can_manage_members

    def test_deny_management_is_permission_denied(self):
        result = GroupAuthorizationService.deny_management("delete")

        assert result.kind == ErrorKind.PERMISSION_DENIED
        assert result.error_code == "NOT_GROUP_MANAGER"


class TestCheckIsMember:
    def test_member_allowed(self, group, volunteer):
        assert GroupAuthorizationService.check_is_member(volunteer, group)

    def test_outsider_denied(self, group, other_volunteer):
        result = GroupAuthorizationService.check_is_member(other_volunteer, group)

        assert result.error_code == "NOT_GROUP_MEMBER"
        assert result.kind == ErrorKind.PERMISSION_DENIED


class TestCheckCanCreate:
    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.ORGANIZATION])
    def test_managing_roles_allowed(self, db, role):
        assert GroupAuthorizationService.check_can_create(UserFactory(role=role))

    @pytest.mark.parametrize("role", [UserRole.MENTOR, UserRole.VOLUNTEER, None])
    def test_other_roles_denied(self, db, role):
        result = GroupAuthorizationService.check_can_create(UserFactory(role=role))

        assert result.error_code == "CANNOT_CREATE_GROUP"
        assert result.kind == ErrorKind.PERMISSION_DENIED

    def test_volunteer_mentor_allowed_for_own_opportunity(self, volunteer):
        OpportunityMentorFactory(opportunity_id="opp-1", volunteer=volunteer)

        assert GroupAuthorizationService.check_can_create(volunteer, opportunity_id="opp-1")

    def test_volunteer_mentor_denied_for_other_opportunity(self, volunteer):
        OpportunityMentorFactory(opportunity_id="opp-1", volunteer=volunteer)

        result = GroupAuthorizationService.check_can_create(volunteer, opportunity_id="opp-2")

        assert result.error_code == "CANNOT_CREATE_GROUP"

    def test_volunteer_mentor_allowed_without_opportunity(self, volunteer):
        OpportunityMentorFactory(volunteer=volunteer)

        assert GroupAuthorizationService.check_can_create(volunteer)

    def test_organization_group_is_admin_only(self, organization, admin):
        result = GroupAuthorizationService.check_can_create(
            organization, is_organization_group=True
        )

        assert result.error_code == "ORGANIZATION_GROUP_ADMIN_ONLY"
        assert GroupAuthorizationService.check_can_create(admin, is_organization_group=True)


class TestCheckCanInitiateDirect:
    @pytest.mark.parametrize("role", [UserRole.ORGANIZATION, UserRole.ADMIN, UserRole.MENTOR])
    def test_initiating_roles_can_open_thread(self, volunteer, role):
        sender = UserFactory(role=role)

        assert GroupAuthorizationService.check_can_initiate_direct(sender, volunteer)

    def test_volunteer_cannot_open_thread(self, volunteer, other_volunteer):
        result = GroupAuthorizationService.check_can_initiate_direct(volunteer, other_volunteer)

        assert result.error_code == "CANNOT_INITIATE_CONVERSATION"
        assert result.kind == ErrorKind.PERMISSION_DENIED

    def test_volunteer_can_reply_in_existing_thread(self, organization, volunteer):
        DirectMessageFactory(sender=organization, receiver=volunteer)

        assert GroupAuthorizationService.check_can_initiate_direct(volunteer, organization)

    def test_group_messages_do_not_count_as_history(self, group, volunteer, organization):
        GroupMessageFactory(group=group, sender=organization)

        assert not GroupAuthorizationService.has_direct_history(volunteer, organization)
