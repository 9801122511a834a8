"""
Service-level authorization for chat operations.

All relationship and role checks for groups and direct threads live here,
so that every endpoint asks the same question the same way.

Key Components:
    GroupRelationship: How an actor relates to a group
    GroupCapabilities: What an actor may do to a group, computed once
    GroupAuthorizationService: Stateless checks returning ServiceResults

Permission rules:
    Manage a group (update, delete, add/remove members):
        - role admin or organization, OR
        - group admin, OR
        - group creator, OR
        - volunteer holding an OpportunityMentor record for the
          group's opportunity
    Create a group:
        - role admin or organization, OR
        - volunteer holding a mentor record for the named opportunity
          (any opportunity when none is named)
        - organization groups additionally require role admin
    Start a new direct thread:
        - role organization, admin or mentor
        - replies to an existing thread are always allowed

Error Codes:
    NOT_GROUP_MEMBER: Actor is not a member of the group
    NOT_GROUP_MANAGER: Actor may not manage the group
    CANNOT_CREATE_GROUP: Actor's role/mentorship does not allow creation
    ORGANIZATION_GROUP_ADMIN_ONLY: Only admins create organization groups
    CANNOT_INITIATE_CONVERSATION: Actor may not start a new direct thread

Usage:
    capabilities = GroupAuthorizationService.capabilities_for(user, group)
    if not capabilities.can_delete:
        return GroupAuthorizationService.deny_management("delete")
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from django.db.models import Q

from authentication.models import UserRole
from core.services import ErrorKind, ServiceResult
from organizations.services import MentorAssignmentService

if TYPE_CHECKING:
    from authentication.models import User
    from chat.models import Group

logger = logging.getLogger(__name__)


MANAGING_ROLES = frozenset({UserRole.ADMIN, UserRole.ORGANIZATION})
INITIATING_ROLES = frozenset({UserRole.ORGANIZATION, UserRole.ADMIN, UserRole.MENTOR})


class GroupRelationship(str, enum.Enum):
    """Relationships an actor can have with a group (several may hold)."""

    CREATOR = "creator"
    GROUP_ADMIN = "group_admin"
    OPPORTUNITY_MENTOR = "opportunity_mentor"
    MEMBER = "member"
    NON_MEMBER = "non_member"


@dataclass(frozen=True)
class GroupCapabilities:
    """
    Result of evaluating one actor against one group.

    Views and services read the flags instead of re-running queries.
    """

    relationships: frozenset = field(default_factory=frozenset)
    can_update: bool = False
    can_delete: bool = False
    can_manage_members: bool = False

    @property
    def is_member(self) -> bool:
        return GroupRelationship.MEMBER in self.relationships


class GroupAuthorizationService:
    """
    Stateless authorization checks for groups and direct threads.

    Query helpers return plain values. The check_* methods return a
    ServiceResult: success(None) when allowed, a PERMISSION_DENIED failure
    naming the unmet requirement otherwise.
    """

    @classmethod
    def relationships(cls, actor: User, group: Group) -> frozenset:
        """
        Every relationship `actor` has with `group`.

        NON_MEMBER is reported alone only when nothing else applies; a
        creator who was somehow dropped from members is still CREATOR.
        """
        found = set()
        if group.created_by_id == actor.pk:
            found.add(GroupRelationship.CREATOR)
        if group.admins.filter(pk=actor.pk).exists():
            found.add(GroupRelationship.GROUP_ADMIN)
        if group.members.filter(pk=actor.pk).exists():
            found.add(GroupRelationship.MEMBER)
        if (
            group.opportunity_id
            and actor.role == UserRole.VOLUNTEER
            and MentorAssignmentService.is_mentor(actor, group.opportunity_id)
        ):
            found.add(GroupRelationship.OPPORTUNITY_MENTOR)
        if GroupRelationship.MEMBER not in found:
            found.add(GroupRelationship.NON_MEMBER)
        return frozenset(found)

    @classmethod
    def capabilities_for(cls, actor: User, group: Group) -> GroupCapabilities:
        """Evaluate the single management predicate for (actor, group)."""
        relationships = cls.relationships(actor, group)
        can_manage = actor.role in MANAGING_ROLES or bool(
            relationships
            & {
                GroupRelationship.GROUP_ADMIN,
                GroupRelationship.CREATOR,
                GroupRelationship.OPPORTUNITY_MENTOR,
            }
        )
        return GroupCapabilities(
            relationships=relationships,
            can_update=can_manage,
            can_delete=can_manage,
            can_manage_members=can_manage,
        )

    @classmethod
    def check_is_member(cls, actor: User, group: Group) -> ServiceResult[None]:
        if group.members.filter(pk=actor.pk).exists():
            return ServiceResult.success(None)
        logger.info(f"User {actor.pk} denied access to group {group.pk}: not a member")
        return ServiceResult.failure(
            "You are not a member of this group",
            error_code="NOT_GROUP_MEMBER",
            kind=ErrorKind.PERMISSION_DENIED,
        )

    @classmethod
    def deny_management(cls, action: str) -> ServiceResult[None]:
        """Failure for an actor lacking the management capability."""
        return ServiceResult.failure(
            f"You don't have permission to {action} this group. "
            "Requires role admin or organization, group admin, group creator, "
            "or mentor of the group's opportunity.",
            error_code="NOT_GROUP_MANAGER",
            kind=ErrorKind.PERMISSION_DENIED,
        )

    @classmethod
    def check_can_create(
        cls,
        actor: User,
        opportunity_id: str | None = None,
        is_organization_group: bool = False,
    ) -> ServiceResult[None]:
        """Whether `actor` may create a group with the given attributes."""
        if actor.role in MANAGING_ROLES:
            allowed = True
        elif actor.role == UserRole.VOLUNTEER:
            allowed = MentorAssignmentService.is_mentor(actor, opportunity_id or None)
        else:
            allowed = False

        if not allowed:
            logger.info(f"User {actor.pk} (role={actor.role}) denied group creation")
            return ServiceResult.failure(
                "Only admins, organizations, or opportunity mentors can create groups",
                error_code="CANNOT_CREATE_GROUP",
                kind=ErrorKind.PERMISSION_DENIED,
            )

        if is_organization_group and actor.role != UserRole.ADMIN:
            logger.info(f"User {actor.pk} denied organization group creation")
            return ServiceResult.failure(
                "Only admins can create organization groups",
                error_code="ORGANIZATION_GROUP_ADMIN_ONLY",
                kind=ErrorKind.PERMISSION_DENIED,
            )

        return ServiceResult.success(None)

    @classmethod
    def has_direct_history(cls, first: User, second: User) -> bool:
        """Whether any direct message exists between the two users, either way."""
        from chat.models import Message

        return Message.objects.filter(
            Q(sender=first, receiver=second) | Q(sender=second, receiver=first),
            group__isnull=True,
        ).exists()

    @classmethod
    def check_can_initiate_direct(cls, sender: User, receiver: User) -> ServiceResult[None]:
        """
        Whether `sender` may send a direct message to `receiver`.

        Always allowed inside an existing thread. Opening a new one needs an
        initiating role.
        """
        if cls.has_direct_history(sender, receiver):
            return ServiceResult.success(None)
        if sender.role in INITIATING_ROLES:
            return ServiceResult.success(None)

        logger.info(
            f"User {sender.pk} (role={sender.role}) denied starting a thread with {receiver.pk}"
        )
        return ServiceResult.failure(
            "Only organizations, admins and mentors can start new conversations. "
            "Wait for one of them to message you first.",
            error_code="CANNOT_INITIATE_CONVERSATION",
            kind=ErrorKind.PERMISSION_DENIED,
        )
