"""
Organization services.

MentorAssignmentService manages OpportunityMentor records and answers the
mentor lookups the chat permission rules depend on.

Related files:
    - models.py: OpportunityMentor
    - chat/authorization.py: Uses is_mentor() and mentors_among()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError

from authentication.models import UserRole
from core.services import BaseService, ErrorKind, ServiceResult
from organizations.models import OpportunityMentor

if TYPE_CHECKING:
    from collections.abc import Iterable

    from authentication.models import User
    from organizations.models import OrganizationProfile


class MentorAssignmentService(BaseService):
    """
    Opportunity mentor assignments.

    Usage:
        result = MentorAssignmentService.assign(
            opportunity_id="opp-42",
            volunteer=volunteer,
            organization_profile=profile,
            assigned_by=org_user,
        )
        if MentorAssignmentService.is_mentor(volunteer, "opp-42"):
            ...
    """

    @classmethod
    def assign(
        cls,
        opportunity_id: str,
        volunteer: User,
        organization_profile: OrganizationProfile,
        assigned_by: User,
    ) -> ServiceResult[OpportunityMentor]:
        """
        Make `volunteer` a mentor for the opportunity.

        Returns:
            ServiceResult with the OpportunityMentor, VALIDATION failure when
            the user is not a volunteer, or CONSTRAINT_VIOLATION when the
            pair already exists.
        """
        if volunteer.role != UserRole.VOLUNTEER:
            return ServiceResult.failure(
                "Only volunteers can be assigned as opportunity mentors",
                error_code="NOT_A_VOLUNTEER",
                kind=ErrorKind.VALIDATION,
            )

        try:
            with cls.atomic():
                mentor = OpportunityMentor.objects.create(
                    opportunity_id=str(opportunity_id),
                    volunteer=volunteer,
                    organization_profile=organization_profile,
                    assigned_by=assigned_by,
                )
        except IntegrityError:
            return ServiceResult.failure(
                "Volunteer is already a mentor for this opportunity",
                error_code="MENTOR_ALREADY_ASSIGNED",
                kind=ErrorKind.CONSTRAINT_VIOLATION,
            )

        cls.get_logger().info(
            f"User {volunteer.pk} assigned as mentor for opportunity {opportunity_id} "
            f"by {assigned_by.pk}"
        )
        return ServiceResult.success(mentor)

    @classmethod
    def revoke(cls, opportunity_id: str, volunteer: User) -> ServiceResult[int]:
        """Remove an assignment; NOT_FOUND if there was none."""
        deleted, _ = OpportunityMentor.objects.filter(
            opportunity_id=str(opportunity_id), volunteer=volunteer
        ).delete()
        if not deleted:
            return ServiceResult.failure(
                "Mentor assignment not found",
                error_code="MENTOR_NOT_FOUND",
                kind=ErrorKind.NOT_FOUND,
            )

        cls.get_logger().info(
            f"Revoked mentor {volunteer.pk} for opportunity {opportunity_id}"
        )
        return ServiceResult.success(deleted)

    @staticmethod
    def is_mentor(user: User, opportunity_id: str | None = None) -> bool:
        """
        Whether `user` mentors the given opportunity.

        With no opportunity, whether `user` mentors any opportunity at all.
        """
        queryset = OpportunityMentor.objects.filter(volunteer=user)
        if opportunity_id:
            queryset = queryset.filter(opportunity_id=str(opportunity_id))
        return queryset.exists()

    @staticmethod
    def mentors_among(opportunity_id: str, user_ids: Iterable[int]) -> set[int]:
        """Subset of `user_ids` holding a mentor record for the opportunity."""
        return set(
            OpportunityMentor.objects.filter(
                opportunity_id=str(opportunity_id),
                volunteer_id__in=list(user_ids),
            ).values_list("volunteer_id", flat=True)
        )
