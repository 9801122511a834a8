"""
Organization models.

Models:
    OrganizationProfile: Profile record for organization accounts
    OpportunityMentor: Assignment of a volunteer as mentor for an opportunity

Design Decisions:
    - Opportunities live in another system; they are referenced by an
      opaque identifier (opportunity_id) without a foreign key
    - OpportunityMentor is the only way a volunteer gains group-management
      rights (see chat.authorization)
    - List fields on OrganizationProfile must be non-empty; this is checked
      on every save, not only in forms
"""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import models
from django.utils import timezone

from authentication.models import UserRole
from core.exceptions import ValidationError
from core.models import BaseModel


class OrganizationType(models.TextChoices):
    """Closed list of organization kinds."""

    NGO = "ngo", "NGO"
    NONPROFIT = "nonprofit", "Nonprofit"
    COMMUNITY_GROUP = "community_group", "Community group"
    SOCIAL_ENTERPRISE = "social_enterprise", "Social enterprise"
    CHARITY = "charity", "Charity"
    EDUCATIONAL_INSTITUTION = "educational_institution", "Educational institution"
    HEALTHCARE_PROVIDER = "healthcare_provider", "Healthcare provider"
    RELIGIOUS_INSTITUTION = "religious_institution", "Religious institution"
    ENVIRONMENTAL_GROUP = "environmental_group", "Environmental group"
    YOUTH_ORGANIZATION = "youth_organization", "Youth organization"
    ARTS_CULTURE_GROUP = "arts_culture_group", "Arts and culture group"
    DISASTER_RELIEF_AGENCY = "disaster_relief_agency", "Disaster relief agency"
    ADVOCACY_GROUP = "advocacy_group", "Advocacy group"
    INTERNATIONAL_AID = "international_aid", "International aid"
    SPORTS_CLUB = "sports_club", "Sports club"
    ANIMAL_SHELTER = "animal_shelter", "Animal shelter"


class OrganizationProfile(BaseModel):
    """
    Public profile of an organization account.

    Linked from User.organization_profile. Its title is shown as the
    counterparty's organization in conversation summaries.

    Fields:
        title: Organization name
        contact_email: Public contact address
        phone_number: Public phone number
        bio: Free-text description
        type: One of OrganizationType
        opportunity_types: Non-empty list of opportunity categories
        required_skills: Non-empty list of skills volunteers need
        state: State/region
        area: Area within the state
        abn: Business number
        website: Optional website URL
        profile_img: Optional profile image URL
        cover_img: Optional cover image URL
    """

    title = models.CharField(max_length=200, help_text="Organization name")
    contact_email = models.EmailField(help_text="Public contact email")
    phone_number = models.CharField(max_length=40, help_text="Public phone number")
    bio = models.TextField(help_text="Description of the organization")
    type = models.CharField(
        max_length=40,
        choices=OrganizationType.choices,
        help_text="Kind of organization",
    )
    opportunity_types = models.JSONField(
        default=list,
        help_text="Opportunity categories offered (at least one)",
    )
    required_skills = models.JSONField(
        default=list,
        help_text="Skills volunteers need (at least one)",
    )
    state = models.CharField(max_length=100, help_text="State or region")
    area = models.CharField(max_length=100, help_text="Area within the state")
    abn = models.CharField(max_length=20, help_text="Business number")
    website = models.URLField(blank=True, default="", help_text="Website URL")
    profile_img = models.URLField(max_length=500, blank=True, default="", help_text="Profile image URL")
    cover_img = models.URLField(max_length=500, blank=True, default="", help_text="Cover image URL")

    class Meta:
        db_table = "organizations_profile"
        ordering = ["title"]

    def __str__(self) -> str:
        return self.title

    def validate_invariants(self) -> None:
        """
        Check the rules a profile must satisfy before it is stored.

        Raises:
            core.exceptions.ValidationError: Unknown type, or an empty list field
        """
        if self.type not in OrganizationType.values:
            raise ValidationError(
                f"{self.type} is not a valid organization type",
                error_code="INVALID_ORGANIZATION_TYPE",
                details={"type": self.type},
            )
        if not self.opportunity_types:
            raise ValidationError(
                "At least one opportunity type is required",
                error_code="OPPORTUNITY_TYPES_REQUIRED",
            )
        if not self.required_skills:
            raise ValidationError(
                "At least one required skill is required",
                error_code="REQUIRED_SKILLS_REQUIRED",
            )

    def save(self, *args, **kwargs):
        self.validate_invariants()
        super().save(*args, **kwargs)


class OpportunityMentor(BaseModel):
    """
    A volunteer assigned as mentor for one opportunity.

    Holding this record lets a volunteer create groups for the opportunity
    and manage any group linked to it.

    Fields:
        opportunity_id: External opportunity identifier
        volunteer: The mentor (a volunteer-role user)
        organization_profile: Organization that owns the opportunity
        assigned_by: User who made the assignment
        assigned_at: When the assignment was made

    Constraints:
        - UniqueConstraint(opportunity_id, volunteer)
    """

    opportunity_id = models.CharField(
        max_length=64,
        db_index=True,
        help_text="Identifier of the opportunity in the opportunities system",
    )
    volunteer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="mentor_assignments",
        help_text="Volunteer assigned as mentor",
    )
    organization_profile = models.ForeignKey(
        OrganizationProfile,
        on_delete=models.CASCADE,
        related_name="mentor_assignments",
        help_text="Organization that owns the opportunity",
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="mentor_assignments_made",
        help_text="User who made this assignment",
    )
    assigned_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the assignment was made",
    )

    class Meta:
        db_table = "organizations_opportunity_mentor"
        ordering = ["-assigned_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["opportunity_id", "volunteer"],
                name="unique_opportunity_mentor",
            ),
        ]
        indexes = [
            models.Index(
                fields=["organization_profile"],
                name="org_mentor_profile_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Mentor {self.volunteer_id} for opportunity {self.opportunity_id}"

    def clean(self):
        """Only volunteers can mentor; forms and the admin go through here."""
        super().clean()
        if self.volunteer_id and self.volunteer.role != UserRole.VOLUNTEER:
            raise DjangoValidationError(
                {"volunteer": "Only volunteers can be assigned as opportunity mentors."}
            )
