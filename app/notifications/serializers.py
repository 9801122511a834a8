"""Serializers for the push token endpoints."""

from rest_framework import serializers


class RegisterTokenSerializer(serializers.Serializer):
    # Presence is checked by DeviceTokenService
    expoPushToken = serializers.CharField(
        max_length=255, required=False, allow_blank=True, allow_null=True, default=None
    )


class TokenResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
