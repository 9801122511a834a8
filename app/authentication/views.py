"""
Authentication views.

This module provides API views for:
- Email/password sign-in (issues a JWT access token)
- Current user retrieval
- Role-based contact listing

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AuthService, ContactService)
    - urls.py: URL routing

Endpoints:
    - Sign in: /api/v1/auth/signin/
    - Current user: /api/v1/auth/me/
    - Available users: /api/v1/users/available/
"""

from drf_spectacular.utils import (
    extend_schema,
    OpenApiExample,
    OpenApiParameter,
    OpenApiResponse,
)
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import (
    AvailableUsersResponseSerializer,
    SignInResponseSerializer,
    SignInSerializer,
    UserSerializer,
)
from authentication.services import AuthService, ContactService
from core.viewset_mixins import ServiceResponseMixin


class SignInView(ServiceResponseMixin, APIView):
    """
    API view for email/password sign-in.

    POST: Authenticate and receive an access token

    URL: /api/v1/auth/signin/

    No authentication required (this IS the login).
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Sign in",
        description=(
            "Authenticate with email and password. Returns a bearer token "
            "and the user record. Updates the user's last_seen timestamp."
        ),
        request=SignInSerializer,
        responses={
            200: SignInResponseSerializer,
            400: OpenApiResponse(description="Email not verified or no password set"),
            401: OpenApiResponse(description="Wrong password"),
            404: OpenApiResponse(description="No user with this email"),
        },
        examples=[
            OpenApiExample(
                "Sign-in Request",
                value={"email": "volunteer@example.com", "password": "s3cret-pass"},
                request_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.sign_in(
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )
        if not result.success:
            return self.failure_response(result)

        return Response(SignInResponseSerializer(result.data).data)


class MeView(APIView):
    """
    API view for the current user.

    GET: Retrieve the authenticated user

    URL: /api/v1/auth/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get current user",
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)


class AvailableUsersView(ServiceResponseMixin, APIView):
    """
    API view listing users the caller may message.

    GET: Paginated, searchable list filtered by the caller's role

    URL: /api/v1/users/available/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List available contacts",
        description=(
            "Volunteers see admins and mentors; admins, mentors and organizations "
            "see volunteers; users without a role get an empty list."
        ),
        parameters=[
            OpenApiParameter("search", str, description="Case-insensitive match on name or email"),
            OpenApiParameter("page", int, description="Page number (default 1)"),
            OpenApiParameter("limit", int, description="Page size (default 50)"),
        ],
        responses={200: AvailableUsersResponseSerializer},
    )
    def get(self, request):
        result = ContactService.available_users(
            request.user,
            search=request.query_params.get("search") or None,
            page=request.query_params.get("page"),
            limit=request.query_params.get("limit"),
        )
        if not result.success:
            return self.failure_response(result)

        return Response(AvailableUsersResponseSerializer(result.data).data)
