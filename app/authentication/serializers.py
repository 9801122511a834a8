"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (read operations, current user and contacts)
- Sign-in request/response

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
    - services.py: AuthService, ContactService

Security:
    - Password fields are write-only
    - All user fields are read-only
"""

from rest_framework import serializers

from authentication.models import User
from organizations.serializers import OrganizationProfileSerializer


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for the current user and sign-in responses.

    Includes the linked organization profile when present.
    """

    organization_profile = OrganizationProfileSerializer(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "role",
            "image",
            "organization_profile",
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user shape used in contact lists and message payloads."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "image", "role"]
        read_only_fields = fields


class SignInSerializer(serializers.Serializer):
    """Sign-in request body."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class SignInResponseSerializer(serializers.Serializer):
    """Sign-in response body."""

    token = serializers.CharField()
    user = UserSerializer()


class AvailableUsersResponseSerializer(serializers.Serializer):
    users = UserSummarySerializer(many=True)
    total = serializers.IntegerField()
    totalPages = serializers.IntegerField(source="total_pages")
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
