"""
Serializers for organization models.
"""

from rest_framework import serializers

from organizations.models import OrganizationProfile


class OrganizationProfileSerializer(serializers.ModelSerializer):
    """Read-only organization profile embedded in user payloads."""

    class Meta:
        model = OrganizationProfile
        fields = [
            "id",
            "title",
            "contact_email",
            "phone_number",
            "bio",
            "type",
            "opportunity_types",
            "required_skills",
            "state",
            "area",
            "abn",
            "website",
            "profile_img",
            "cover_img",
        ]
        read_only_fields = fields
