"""
Views for push token registration.

Endpoints:
    POST /api/v1/notifications/register-token/ - Store the device's push token
    POST /api/v1/notifications/unregister-token/ - Clear it
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.viewset_mixins import ServiceResponseMixin
from notifications.serializers import RegisterTokenSerializer, TokenResponseSerializer
from notifications.services import DeviceTokenService


class RegisterTokenView(ServiceResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Register push token",
        description="Overwrites the caller's single push token slot.",
        request=RegisterTokenSerializer,
        responses={
            200: TokenResponseSerializer,
            400: OpenApiResponse(description="Expo push token is required"),
        },
    )
    def post(self, request):
        serializer = RegisterTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = DeviceTokenService.register(
            request.user, serializer.validated_data["expoPushToken"]
        )
        if not result.success:
            return self.failure_response(result)
        return Response({"success": True, "message": "Device token registered successfully"})


class UnregisterTokenView(ServiceResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Unregister push token",
        request=None,
        responses={200: TokenResponseSerializer},
    )
    def post(self, request):
        result = DeviceTokenService.unregister(request.user)
        if not result.success:
            return self.failure_response(result)
        return Response({"success": True, "message": "Device token unregistered successfully"})
