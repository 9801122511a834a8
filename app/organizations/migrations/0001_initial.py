"""
Create OrganizationProfile and OpportunityMentor.
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


ORGANIZATION_TYPE_CHOICES = [
    ("ngo", "NGO"),
    ("nonprofit", "Nonprofit"),
    ("community_group", "Community group"),
    ("social_enterprise", "Social enterprise"),
    ("charity", "Charity"),
    ("educational_institution", "Educational institution"),
    ("healthcare_provider", "Healthcare provider"),
    ("religious_institution", "Religious institution"),
    ("environmental_group", "Environmental group"),
    ("youth_organization", "Youth organization"),
    ("arts_culture_group", "Arts and culture group"),
    ("disaster_relief_agency", "Disaster relief agency"),
    ("advocacy_group", "Advocacy group"),
    ("international_aid", "International aid"),
    ("sports_club", "Sports club"),
    ("animal_shelter", "Animal shelter"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("authentication", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="OrganizationProfile",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="When this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="When this record was last modified",
                    ),
                ),
                ("title", models.CharField(help_text="Organization name", max_length=200)),
                ("contact_email", models.EmailField(help_text="Public contact email", max_length=254)),
                ("phone_number", models.CharField(help_text="Public phone number", max_length=40)),
                ("bio", models.TextField(help_text="Description of the organization")),
                (
                    "type",
                    models.CharField(
                        choices=ORGANIZATION_TYPE_CHOICES,
                        help_text="Kind of organization",
                        max_length=40,
                    ),
                ),
                (
                    "opportunity_types",
                    models.JSONField(
                        default=list,
                        help_text="Opportunity categories offered (at least one)",
                    ),
                ),
                (
                    "required_skills",
                    models.JSONField(
                        default=list,
                        help_text="Skills volunteers need (at least one)",
                    ),
                ),
                ("state", models.CharField(help_text="State or region", max_length=100)),
                ("area", models.CharField(help_text="Area within the state", max_length=100)),
                ("abn", models.CharField(help_text="Business number", max_length=20)),
                ("website", models.URLField(blank=True, default="", help_text="Website URL")),
                (
                    "profile_img",
                    models.URLField(
                        blank=True, default="", help_text="Profile image URL", max_length=500
                    ),
                ),
                (
                    "cover_img",
                    models.URLField(
                        blank=True, default="", help_text="Cover image URL", max_length=500
                    ),
                ),
            ],
            options={
                "db_table": "organizations_profile",
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="OpportunityMentor",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="When this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="When this record was last modified",
                    ),
                ),
                (
                    "opportunity_id",
                    models.CharField(
                        db_index=True,
                        help_text="Identifier of the opportunity in the opportunities system",
                        max_length=64,
                    ),
                ),
                (
                    "assigned_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="When the assignment was made",
                    ),
                ),
                (
                    "assigned_by",
                    models.ForeignKey(
                        help_text="User who made this assignment",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="mentor_assignments_made",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "organization_profile",
                    models.ForeignKey(
                        help_text="Organization that owns the opportunity",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mentor_assignments",
                        to="organizations.organizationprofile",
                    ),
                ),
                (
                    "volunteer",
                    models.ForeignKey(
                        help_text="Volunteer assigned as mentor",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mentor_assignments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "organizations_opportunity_mentor",
                "ordering": ["-assigned_at"],
                "indexes": [
                    models.Index(
                        fields=["organization_profile"],
                        name="org_mentor_profile_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("opportunity_id", "volunteer"),
                        name="unique_opportunity_mentor",
                    ),
                ],
            },
        ),
    ]
